"""Invite lifecycle (pending -> accepted | declined) and invite-code redemption.

Accepting an invite does not join the event; the client follows up with a
separate join. Redeeming a code does join, via the membership state machine.
"""
import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventroster.config import settings
from eventroster.errors import Aborted, FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from eventroster.models.event import Event
from eventroster.models.invite import Invite, InviteCode, InviteStatus
from eventroster.models.user import User
from eventroster.services import membership_service
from eventroster.services.transactions import is_write_conflict, run_in_transaction

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 5


def _as_utc(v: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if v is None:
        return None
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


def send_invite(
    db: Session,
    sender_id: str,
    event_id: str,
    to_user_id: str,
    message: Optional[str] = None,
) -> Invite:
    if not event_id or not to_user_id:
        raise InvalidArgument("event_id and to_user_id are required")
    if to_user_id == sender_id:
        raise InvalidArgument("Cannot invite yourself")

    event = db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    sender = db.get(User, sender_id)

    invite = Invite(
        event_id=event_id,
        from_user_id=sender_id,
        to_user_id=to_user_id,
        message=message,
        status=InviteStatus.pending,
        event_title=event.title,
        from_user_name=(sender.username if sender else None) or membership_service.UNKNOWN_USERNAME,
    )
    db.add(invite)
    db.commit()
    db.refresh(invite)
    logger.info("Invite %s sent from %s to %s for event %s", invite.invite_id, sender_id, to_user_id, event_id)
    return invite


def list_pending_invites(db: Session, user_id: str) -> list[Invite]:
    return (
        db.query(Invite)
        .filter(Invite.to_user_id == user_id, Invite.status == InviteStatus.pending)
        .order_by(Invite.created_at.desc())
        .all()
    )


def respond_to_invite(db: Session, caller_id: str, invite_id: str, status: str) -> Invite:
    """Recipient accepts or declines a pending invite. Single-row update."""
    try:
        new_status = InviteStatus(status)
    except ValueError:
        raise InvalidArgument(f"Invalid invite status: {status}")
    if new_status == InviteStatus.pending:
        raise InvalidArgument("Response must be 'accepted' or 'declined'")

    def body(tx: Session) -> Invite:
        invite = tx.get(Invite, invite_id)
        if not invite:
            raise NotFound("Invite not found")
        if invite.to_user_id != caller_id:
            raise PermissionDenied("Not the invite recipient")
        if invite.status != InviteStatus.pending:
            raise FailedPrecondition(f"Invite is already {invite.status.value}")
        invite.status = new_status
        invite.responded_at = datetime.now(timezone.utc)
        return invite

    invite = run_in_transaction(db, body)
    db.refresh(invite)
    logger.info("Invite %s %s by %s", invite_id, new_status.value, caller_id)
    return invite


def _new_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(settings.INVITE_CODE_LENGTH))


def create_invite_code(
    db: Session,
    host_id: str,
    event_id: str,
    ttl_hours: Optional[int] = None,
) -> InviteCode:
    """Host mints a short shareable code for an event."""
    if not event_id:
        raise InvalidArgument("event_id is required")
    event = db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    if event.creator_id != host_id:
        raise PermissionDenied("Not event host")

    ttl = settings.INVITE_CODE_TTL_HOURS if ttl_hours is None else ttl_hours
    expires_at = datetime.now(timezone.utc) + timedelta(hours=ttl) if ttl > 0 else None

    for _ in range(MAX_CODE_ATTEMPTS):
        row = InviteCode(code=_new_code(), event_id=event_id, created_by=host_id, expires_at=expires_at)
        db.add(row)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if not is_write_conflict(e):
                raise
            continue
        db.refresh(row)
        logger.info("Invite code %s created for event %s", row.code, event_id)
        return row

    raise Aborted("Could not allocate a unique invite code")


def resolve_invite_code(db: Session, code: str) -> str:
    """Map a code to its event id; unknown and expired codes are NotFound."""
    normalized = (code or "").strip().upper()
    if not normalized:
        raise InvalidArgument("code is required")

    row = db.get(InviteCode, normalized)
    if not row:
        raise NotFound("Invite code not found")
    expires_at = _as_utc(row.expires_at)
    if expires_at is not None and expires_at <= datetime.now(timezone.utc):
        raise NotFound("Invite code expired")
    return row.event_id


def redeem_invite_code(db: Session, caller_id: str, code: str) -> dict[str, Any]:
    """Resolve ``code`` and join its event. Returns the event and the join outcome."""
    event_id = resolve_invite_code(db, code)
    outcome = membership_service.join_event(db, caller_id, event_id)
    event = db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    db.refresh(event)
    logger.info("User %s redeemed invite code for event %s (%s)", caller_id, event_id, outcome)
    return {"event": event, "outcome": outcome}
