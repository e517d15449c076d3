"""Event API routes — creation and reads. Membership writes live in membership.py."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventroster.auth import get_current_uid
from eventroster.database import get_db
from eventroster.schemas.event import EventCreate, EventOut
from eventroster.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
):
    """Create an event hosted by the caller. Defaults are filled on insert."""
    event = event_service.create_event(
        db=db,
        creator_id=uid,
        title=payload.title,
        description=payload.description,
        capacity=payload.capacity,
        is_private=payload.is_private,
        event_id=payload.event_id,
    )
    return EventOut.model_validate(event)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    """Fetch an event; ``users_joined`` is reconciled against ``attendees`` on read."""
    return EventOut.model_validate(event_service.get_event(db, event_id))
