"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the event roster:
users, events, join_requests, user_joined_events, invites, invite_codes,
friend_requests, friendships, reports.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(128), primary_key=True),
        sa.Column("username", sa.String(100), nullable=True),
        sa.Column("avatar", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(64), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("creator_id", sa.String(128), nullable=False),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("is_private", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("attendees", sa.JSON, nullable=True),
        sa.Column("users_joined", sa.JSON, nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_events_creator_id", "events", ["creator_id"])

    # --- join_requests ---
    op.create_table(
        "join_requests",
        sa.Column("request_id", sa.String(200), primary_key=True),
        sa.Column("event_id", sa.String(64), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("response_note", sa.String(500), nullable=True),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_join_requests_event_user"),
    )
    op.create_index("ix_join_requests_event_id", "join_requests", ["event_id"])

    # --- user_joined_events ---
    op.create_table(
        "user_joined_events",
        sa.Column("user_id", sa.String(128), primary_key=True),
        sa.Column("event_id", sa.String(64), primary_key=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
    )

    # --- invites ---
    op.create_table(
        "invites",
        sa.Column("invite_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(64), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("from_user_id", sa.String(128), nullable=False),
        sa.Column("to_user_id", sa.String(128), nullable=False),
        sa.Column("message", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("event_title", sa.String(255), nullable=True),
        sa.Column("from_user_name", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    )
    op.create_index("ix_invites_to_user_id", "invites", ["to_user_id"])

    # --- invite_codes ---
    op.create_table(
        "invite_codes",
        sa.Column("code", sa.String(32), primary_key=True),
        sa.Column("event_id", sa.String(64), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
    )

    # --- friend_requests ---
    op.create_table(
        "friend_requests",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column("from_uid", sa.String(128), nullable=False),
        sa.Column("to_uid", sa.String(128), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("from_name", sa.String(100), nullable=True),
        sa.Column("from_avatar", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    )
    op.create_index("ix_friend_requests_from_uid", "friend_requests", ["from_uid"])
    op.create_index("ix_friend_requests_to_uid", "friend_requests", ["to_uid"])

    # --- friendships ---
    op.create_table(
        "friendships",
        sa.Column("user_id", sa.String(128), primary_key=True),
        sa.Column("friend_id", sa.String(128), primary_key=True),
        sa.Column("since", sa.DateTime(timezone=True), nullable=False),
    )

    # --- reports ---
    op.create_table(
        "reports",
        sa.Column("report_id", sa.String(36), primary_key=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("target_id", sa.String(128), nullable=False),
        sa.Column("reporter_id", sa.String(128), nullable=False),
        sa.Column("reason", sa.String(500), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("reports")
    op.drop_table("friendships")
    op.drop_table("friend_requests")
    op.drop_table("invite_codes")
    op.drop_table("invites")
    op.drop_table("user_joined_events")
    op.drop_table("join_requests")
    op.drop_table("events")
    op.drop_table("users")
