"""Moderation report ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from eventroster.database import Base


class ReportType(str, enum.Enum):
    post = "post"
    comment = "comment"
    user = "user"
    event = "event"


class Report(Base):
    __tablename__ = "reports"

    report_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(SAEnum(ReportType), nullable=False)
    target_id = Column(String(128), nullable=False)
    reporter_id = Column(String(128), nullable=False)
    reason = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
