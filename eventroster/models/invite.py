"""Invite and InviteCode ORM models."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from eventroster.database import Base


class InviteStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"


class Invite(Base):
    __tablename__ = "invites"

    invite_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(64), ForeignKey("events.event_id"), nullable=False)
    from_user_id = Column(String(128), nullable=False)
    to_user_id = Column(String(128), nullable=False, index=True)
    message = Column(String(500), nullable=True)
    status = Column(SAEnum(InviteStatus), nullable=False, default=InviteStatus.pending)
    # Display caches, not kept in sync with the event/profile
    event_title = Column(String(255), nullable=True)
    from_user_name = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    responded_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class InviteCode(Base):
    __tablename__ = "invite_codes"

    code = Column(String(32), primary_key=True)
    event_id = Column(String(64), ForeignKey("events.event_id"), nullable=False)
    created_by = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=True)
