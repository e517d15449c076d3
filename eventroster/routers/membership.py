"""Membership API routes — thin wrappers over the membership state machine."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventroster.auth import get_current_uid
from eventroster.database import get_db
from eventroster.errors import InvalidArgument
from eventroster.models.join_request import JoinRequestStatus
from eventroster.schemas.membership import JoinRequestOut, OperationResult, RejectPayload
from eventroster.services import membership_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{event_id}/join", response_model=OperationResult)
def join_event(event_id: str, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Join a public event, or request to join a private one."""
    membership_service.join_event(db, uid, event_id)
    return OperationResult()


@router.post("/{event_id}/leave", response_model=OperationResult)
def leave_event(event_id: str, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Leave an event. Leaving an event you are not in is a no-op."""
    membership_service.leave_event(db, uid, event_id)
    return OperationResult()


@router.delete("/{event_id}/join-request", response_model=OperationResult)
def cancel_join_request(event_id: str, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Withdraw the caller's pending join request."""
    membership_service.cancel_join_request(db, uid, event_id)
    return OperationResult()


@router.get("/{event_id}/join-requests", response_model=list[JoinRequestOut])
def list_join_requests(
    event_id: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
):
    """Host-only: list join requests for an event, newest first."""
    status = None
    if status_filter:
        try:
            status = JoinRequestStatus(status_filter)
        except ValueError:
            raise InvalidArgument(f"Invalid status: {status_filter}")
    return membership_service.list_join_requests(db, uid, event_id, status)


@router.post("/{event_id}/join-requests/{attendee_id}/approve", response_model=OperationResult)
def approve_attendee(
    event_id: str,
    attendee_id: str,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
):
    """Host approves a pending join request."""
    membership_service.approve_attendee(db, uid, event_id, attendee_id)
    return OperationResult()


@router.post("/{event_id}/join-requests/{attendee_id}/reject", response_model=OperationResult)
def reject_join_request(
    event_id: str,
    attendee_id: str,
    payload: Optional[RejectPayload] = None,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
):
    """Host rejects a pending join request, optionally with a note."""
    note = payload.note if payload else None
    membership_service.reject_join_request(db, uid, event_id, attendee_id, note)
    return OperationResult()
