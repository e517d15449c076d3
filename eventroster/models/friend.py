"""FriendRequest and Friendship ORM models."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Integer, Enum as SAEnum
from sqlalchemy.sql import func
from eventroster.database import Base


class FriendRequestStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class FriendRequest(Base):
    __tablename__ = "friend_requests"

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    from_uid = Column(String(128), nullable=False, index=True)
    to_uid = Column(String(128), nullable=False, index=True)
    status = Column(SAEnum(FriendRequestStatus), nullable=False, default=FriendRequestStatus.pending)
    from_name = Column(String(100), nullable=True)
    from_avatar = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class Friendship(Base):
    """One direction of a friendship; always written in symmetric pairs."""

    __tablename__ = "friendships"

    user_id = Column(String(128), primary_key=True)
    friend_id = Column(String(128), primary_key=True)
    since = Column(DateTime(timezone=True), nullable=False)
