"""Invite and invite-code API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventroster.auth import get_current_uid
from eventroster.database import get_db
from eventroster.schemas.event import EventOut
from eventroster.schemas.invite import (
    InviteCodeCreate,
    InviteCodeOut,
    InviteCodeRedeem,
    InviteCreate,
    InviteOut,
    InviteRespond,
    RedeemResult,
)
from eventroster.services import invite_service

logger = logging.getLogger(__name__)
router = APIRouter()
codes_router = APIRouter()


@router.post("/", response_model=InviteOut, status_code=status.HTTP_201_CREATED)
def send_invite(payload: InviteCreate, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Invite another user to an event."""
    return invite_service.send_invite(db, uid, payload.event_id, payload.to_user_id, payload.message)


@router.get("/pending", response_model=list[InviteOut])
def pending_invites(uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Pending invites addressed to the caller."""
    return invite_service.list_pending_invites(db, uid)


@router.post("/{invite_id}/respond", response_model=InviteOut)
def respond_to_invite(
    invite_id: str,
    payload: InviteRespond,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
):
    """Accept or decline an invite. Accepting does not join the event."""
    return invite_service.respond_to_invite(db, uid, invite_id, payload.status)


@codes_router.post("/", response_model=InviteCodeOut, status_code=status.HTTP_201_CREATED)
def create_invite_code(payload: InviteCodeCreate, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Host mints a shareable code for an event."""
    return invite_service.create_invite_code(db, uid, payload.event_id, payload.ttl_hours)


@codes_router.post("/redeem", response_model=RedeemResult)
def redeem_invite_code(payload: InviteCodeRedeem, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Resolve a code to its event and join it."""
    result = invite_service.redeem_invite_code(db, uid, payload.code)
    return RedeemResult(outcome=result["outcome"], event=EventOut.model_validate(result["event"]))
