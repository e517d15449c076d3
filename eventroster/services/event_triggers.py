"""Event creation normalization.

Every newly created event passes through ``normalize_event`` before its row is
written, so the membership state machine never sees a half-initialized event.
Normalization only fills gaps; values supplied by the creator are kept.
"""
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import event as sa_event, or_
from sqlalchemy.orm import Session

from eventroster.models.event import Event

logger = logging.getLogger(__name__)


def normalize_event(target: Event) -> list[str]:
    """Backfill missing fields on ``target``; return the names of filled fields."""
    filled = []
    if not target.event_id:
        target.event_id = uuid.uuid4().hex
        filled.append("event_id")
    if target.created_at is None:
        target.created_at = datetime.now(timezone.utc)
        filled.append("created_at")
    if target.attendees is None:
        target.attendees = []
        filled.append("attendees")
    if target.users_joined is None:
        target.users_joined = []
        filled.append("users_joined")
    return filled


@sa_event.listens_for(Event, "before_insert")
def _on_event_created(mapper, connection, target: Event) -> None:
    filled = normalize_event(target)
    if filled:
        logger.info("Initialized event %s (%s)", target.event_id, ", ".join(filled))


def backfill_events(db: Session) -> int:
    """Normalize stored events that bypassed the ORM insert path."""
    rows = (
        db.query(Event)
        .filter(or_(Event.created_at.is_(None), Event.attendees.is_(None), Event.users_joined.is_(None)))
        .all()
    )
    for ev in rows:
        normalize_event(ev)
    db.commit()
    if rows:
        logger.info("Backfilled %d events", len(rows))
    return len(rows)
