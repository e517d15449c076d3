"""Per-user joined-events index (users/{uid}/joinedEvents/{eventId}).

Derived state: a row exists exactly when the user is in the event's attendees.
"""
from sqlalchemy import Column, String, DateTime
from eventroster.database import Base


class UserJoinedEvent(Base):
    __tablename__ = "user_joined_events"

    user_id = Column(String(128), primary_key=True)
    event_id = Column(String(64), primary_key=True)
    joined_at = Column(DateTime(timezone=True), nullable=False)
