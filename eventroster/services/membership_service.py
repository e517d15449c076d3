"""Membership state machine — the only writer of membership state.

Per (event, user) pair: NONE -> PENDING -> MEMBER, NONE -> MEMBER for public
events, PENDING -> REJECTED, PENDING -> discarded, MEMBER -> NONE.

Membership is stored three ways and all three move together inside one
transaction:
- ``events.attendees`` (authoritative set of uids)
- ``events.users_joined`` (profile snapshot cache, see below)
- ``user_joined_events`` (per-user index)
plus ``join_requests`` for private events.

``users_joined`` is not pruned on leave. ``visible_users_joined`` filters it
against ``attendees`` on read, and ``reconcile_users_joined`` is the sweep
that rewrites the stored list.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session

from eventroster.errors import FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from eventroster.models.event import Event
from eventroster.models.join_request import JoinRequest, JoinRequestStatus, join_request_id
from eventroster.models.joined_event import UserJoinedEvent
from eventroster.models.user import User
from eventroster.services.transactions import run_in_transaction

logger = logging.getLogger(__name__)

UNKNOWN_USERNAME = "Unknown"


# ---------------------------------------------------------------------------
# Set-semantics helpers for JSON list columns
# ---------------------------------------------------------------------------
def array_union(values: Optional[list], *items: Any) -> list:
    """Return a new list with ``items`` appended unless already present (by value)."""
    result = list(values or [])
    for item in items:
        if item not in result:
            result.append(item)
    return result


def array_remove(values: Optional[list], *items: Any) -> list:
    """Return a new list without any element equal to one of ``items``."""
    return [v for v in (values or []) if v not in items]


def profile_snapshot(db: Session, uid: str) -> dict[str, Any]:
    """Best-effort display snapshot of a user; missing data gets placeholders."""
    user = db.get(User, uid)
    return {
        "uid": uid,
        "username": (user.username if user else None) or UNKNOWN_USERNAME,
        "avatar": (user.avatar if user else None) or None,
    }


def visible_users_joined(event: Event) -> list[dict[str, Any]]:
    """Filter-on-read view of ``users_joined``: current attendees only, latest snapshot per uid."""
    attendees = set(event.attendees or [])
    latest: dict[str, dict[str, Any]] = {}
    for entry in event.users_joined or []:
        uid = entry.get("uid") if isinstance(entry, dict) else None
        if uid in attendees:
            latest[uid] = entry
    return list(latest.values())


# ---------------------------------------------------------------------------
# Internal write helpers: only called from inside a transaction body
# ---------------------------------------------------------------------------
def _require(**params: Optional[str]) -> None:
    missing = [name for name, value in params.items() if not value]
    if missing:
        raise InvalidArgument(f"Missing params: {', '.join(missing)}")


def _get_event(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    return event


def _check_host(event: Event, host_id: str) -> None:
    if event.creator_id != host_id:
        raise PermissionDenied("Not event host")


def _check_capacity(event: Event) -> None:
    if len(event.attendees or []) >= event.effective_capacity:
        raise FailedPrecondition("Event is full")


def _add_member(db: Session, event: Event, uid: str, now: datetime) -> None:
    """Add ``uid`` to the roster, the snapshot cache and the per-user index."""
    event.attendees = array_union(event.attendees, uid)
    # The current snapshot must end up last; readers take the last entry per uid
    snapshot = profile_snapshot(db, uid)
    event.users_joined = array_remove(event.users_joined, snapshot) + [snapshot]

    entry = db.get(UserJoinedEvent, (uid, event.event_id))
    if entry:
        entry.joined_at = now
    else:
        db.add(UserJoinedEvent(user_id=uid, event_id=event.event_id, joined_at=now))


def _remove_member(db: Session, event: Event, uid: str) -> None:
    event.attendees = array_remove(event.attendees, uid)
    entry = db.get(UserJoinedEvent, (uid, event.event_id))
    if entry:
        db.delete(entry)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------
def join_event(db: Session, caller_id: str, event_id: str) -> str:
    """Join a public event, or file a pending join request for a private one.

    Returns the outcome: ``"joined"``, ``"already_member"`` or ``"requested"``.

    Membership is checked before capacity, so an existing member calling join
    on a full event gets ``"already_member"`` rather than "Event is full".
    That keeps join idempotent and safe for clients to retry.
    """
    _require(event_id=event_id)

    def body(tx: Session) -> str:
        event = _get_event(tx, event_id)
        if caller_id in (event.attendees or []):
            return "already_member"
        _check_capacity(event)
        now = datetime.now(timezone.utc)

        if event.is_private:
            rid = join_request_id(event_id, caller_id)
            request = tx.get(JoinRequest, rid)
            if request is None:
                tx.add(JoinRequest(
                    request_id=rid,
                    event_id=event_id,
                    user_id=caller_id,
                    status=JoinRequestStatus.pending,
                    created_at=now,
                ))
            elif request.status == JoinRequestStatus.rejected:
                raise FailedPrecondition("Join request was rejected")
            else:
                request.status = JoinRequestStatus.pending
                request.created_at = now
                request.response_note = None
                request.responded_at = None
            return "requested"

        _add_member(tx, event, caller_id, now)
        return "joined"

    outcome = run_in_transaction(db, body)
    if outcome == "requested":
        logger.info("User %s requested to join private event %s", caller_id, event_id)
    elif outcome == "joined":
        logger.info("User %s joined event %s", caller_id, event_id)
    return outcome


def leave_event(db: Session, caller_id: str, event_id: str) -> bool:
    """Leave an event. Returns False when there was nothing to leave."""
    _require(event_id=event_id)

    def body(tx: Session) -> bool:
        event = tx.get(Event, event_id)
        if not event or caller_id not in (event.attendees or []):
            return False
        # users_joined is left as is; reconciled on read / by sweep
        _remove_member(tx, event, caller_id)
        return True

    left = run_in_transaction(db, body)
    if left:
        logger.info("User %s left event %s", caller_id, event_id)
    return left


def approve_attendee(db: Session, host_id: str, event_id: str, attendee_id: str) -> None:
    """Host approves a pending join request and adds the requester as a member."""
    _require(event_id=event_id, attendee_id=attendee_id)

    def body(tx: Session) -> None:
        event = _get_event(tx, event_id)
        _check_host(event, host_id)

        request = tx.get(JoinRequest, join_request_id(event_id, attendee_id))
        if not request:
            raise NotFound("Join request not found")
        if request.status != JoinRequestStatus.pending:
            raise FailedPrecondition("Request already processed")

        _check_capacity(event)

        now = datetime.now(timezone.utc)
        request.status = JoinRequestStatus.approved
        request.responded_at = now
        _add_member(tx, event, attendee_id, now)

    run_in_transaction(db, body)
    logger.info("Host %s approved %s for event %s", host_id, attendee_id, event_id)


def reject_join_request(
    db: Session,
    host_id: str,
    event_id: str,
    attendee_id: str,
    note: Optional[str] = None,
) -> None:
    """Host rejects a pending join request. Touches only the request row."""
    _require(event_id=event_id, attendee_id=attendee_id)

    def body(tx: Session) -> None:
        event = _get_event(tx, event_id)
        _check_host(event, host_id)

        request = tx.get(JoinRequest, join_request_id(event_id, attendee_id))
        if not request:
            raise NotFound("Join request not found")
        if request.status != JoinRequestStatus.pending:
            raise FailedPrecondition("Request already processed")

        request.status = JoinRequestStatus.rejected
        request.responded_at = datetime.now(timezone.utc)
        if note:
            request.response_note = note

    run_in_transaction(db, body)
    logger.info("Host %s rejected %s for event %s", host_id, attendee_id, event_id)


def cancel_join_request(db: Session, caller_id: str, event_id: str) -> bool:
    """Requester withdraws their own pending request. Returns False if none existed."""
    _require(event_id=event_id)

    def body(tx: Session) -> bool:
        request = tx.get(JoinRequest, join_request_id(event_id, caller_id))
        if not request:
            return False
        if request.status != JoinRequestStatus.pending:
            raise FailedPrecondition("Request already processed")
        tx.delete(request)
        return True

    cancelled = run_in_transaction(db, body)
    if cancelled:
        logger.info("User %s withdrew join request for event %s", caller_id, event_id)
    return cancelled


def list_join_requests(
    db: Session,
    host_id: str,
    event_id: str,
    status: Optional[JoinRequestStatus] = None,
) -> list[JoinRequest]:
    _require(event_id=event_id)
    event = _get_event(db, event_id)
    _check_host(event, host_id)

    query = db.query(JoinRequest).filter(JoinRequest.event_id == event_id)
    if status:
        query = query.filter(JoinRequest.status == status)
    return query.order_by(JoinRequest.created_at.desc()).all()


def list_joined_events(db: Session, user_id: str) -> list[UserJoinedEvent]:
    return (
        db.query(UserJoinedEvent)
        .filter(UserJoinedEvent.user_id == user_id)
        .order_by(UserJoinedEvent.joined_at.desc())
        .all()
    )


# ---------------------------------------------------------------------------
# Reconciliation sweep for the users_joined cache
# ---------------------------------------------------------------------------
def reconcile_users_joined(db: Session, event_id: str) -> bool:
    """Rewrite ``users_joined`` to its filtered view. Returns True if it changed."""

    def body(tx: Session) -> bool:
        event = tx.get(Event, event_id)
        if not event:
            return False
        cleaned = visible_users_joined(event)
        if cleaned == (event.users_joined or []):
            return False
        event.users_joined = cleaned
        return True

    changed = run_in_transaction(db, body)
    if changed:
        logger.info("Reconciled users_joined for event %s", event_id)
    return changed


def sweep_users_joined(db: Session) -> int:
    """Run ``reconcile_users_joined`` over every event; return how many changed."""
    event_ids = [row.event_id for row in db.query(Event.event_id).all()]
    return sum(1 for eid in event_ids if reconcile_users_joined(db, eid))
