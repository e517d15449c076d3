"""JoinRequest ORM model — one row per (event, user), keyed "{event_id}_{user_id}"."""
import enum
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum
from eventroster.database import Base


class JoinRequestStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


def join_request_id(event_id: str, user_id: str) -> str:
    return f"{event_id}_{user_id}"


class JoinRequest(Base):
    __tablename__ = "join_requests"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_join_requests_event_user"),)

    request_id = Column(String(200), primary_key=True)
    event_id = Column(String(64), ForeignKey("events.event_id"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False)
    status = Column(SAEnum(JoinRequestStatus), nullable=False, default=JoinRequestStatus.pending)
    created_at = Column(DateTime(timezone=True), nullable=False)
    response_note = Column(String(500), nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
