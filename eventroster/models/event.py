"""Event ORM model — source of truth for membership."""
from sqlalchemy import Column, String, DateTime, Integer, Boolean, JSON, Text
from sqlalchemy.sql import func
from eventroster.config import settings
from eventroster.database import Base


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(64), primary_key=True)
    title = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=True)
    creator_id = Column(String(128), nullable=False, index=True)
    capacity = Column(Integer, nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)
    attendees = Column(JSON(none_as_null=True), nullable=True)      # list[str], set semantics
    users_joined = Column(JSON(none_as_null=True), nullable=True)   # list[{uid, username, avatar}], cache
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    @property
    def effective_capacity(self) -> int:
        return self.capacity or settings.DEFAULT_EVENT_CAPACITY
