"""Event CRUD used by the membership core's callers.

Creation only writes what the creator supplies; the creation trigger in
``event_triggers`` fills id, timestamp and empty collections on insert.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from eventroster.errors import InvalidArgument, NotFound
from eventroster.models.event import Event

logger = logging.getLogger(__name__)


def create_event(
    db: Session,
    creator_id: str,
    title: str,
    description: Optional[str] = None,
    capacity: Optional[int] = None,
    is_private: bool = False,
    event_id: Optional[str] = None,
) -> Event:
    if not (title or "").strip():
        raise InvalidArgument("title is required")
    if capacity is not None and capacity < 0:
        raise InvalidArgument("capacity cannot be negative")

    event = Event(
        event_id=event_id or None,
        title=title.strip(),
        description=description,
        creator_id=creator_id,
        capacity=capacity,
        is_private=is_private,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by %s", event.title, event.event_id, creator_id)
    return event


def get_event(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    return event
