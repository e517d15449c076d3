"""Friend requests and the symmetric friendship index.

Accepting a request writes the request status and both friendship directions
in one transaction, the same pattern the membership core uses for rosters.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from eventroster.errors import AlreadyExists, FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from eventroster.models.friend import FriendRequest, FriendRequestStatus, Friendship
from eventroster.services.transactions import run_in_transaction

logger = logging.getLogger(__name__)


def _get_request(db: Session, request_id: str) -> FriendRequest:
    if not request_id:
        raise InvalidArgument("request_id required")
    request = db.get(FriendRequest, request_id)
    if not request:
        raise NotFound("Friend request not found")
    return request


def _check_pending(request: FriendRequest) -> None:
    if request.status != FriendRequestStatus.pending:
        raise FailedPrecondition("Request is not pending")


def are_friends(db: Session, uid: str, other_uid: str) -> bool:
    return db.get(Friendship, (uid, other_uid)) is not None


def send_friend_request(
    db: Session,
    from_uid: str,
    to_uid: str,
    sender_name: Optional[str] = None,
    sender_avatar: Optional[str] = None,
) -> FriendRequest:
    if not to_uid:
        raise InvalidArgument("to_uid required")
    if from_uid == to_uid:
        raise InvalidArgument("Cannot send request to yourself")

    existing = (
        db.query(FriendRequest)
        .filter(
            FriendRequest.from_uid == from_uid,
            FriendRequest.to_uid == to_uid,
            FriendRequest.status == FriendRequestStatus.pending,
        )
        .first()
    )
    if existing:
        raise AlreadyExists("Friend request already pending")
    if are_friends(db, from_uid, to_uid):
        raise AlreadyExists("Already friends")

    request = FriendRequest(
        from_uid=from_uid,
        to_uid=to_uid,
        status=FriendRequestStatus.pending,
        from_name=sender_name or None,
        from_avatar=sender_avatar or None,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info("Friend request sent from %s to %s", from_uid, to_uid)
    return request


def accept_friend_request(db: Session, caller_id: str, request_id: str) -> None:
    def body(tx: Session) -> None:
        request = _get_request(tx, request_id)
        if request.to_uid != caller_id:
            raise PermissionDenied("Not authorized to accept this request")
        _check_pending(request)

        now = datetime.now(timezone.utc)
        request.status = FriendRequestStatus.accepted
        request.updated_at = now
        for uid, friend_id in ((request.from_uid, request.to_uid), (request.to_uid, request.from_uid)):
            row = tx.get(Friendship, (uid, friend_id))
            if row:
                row.since = now
            else:
                tx.add(Friendship(user_id=uid, friend_id=friend_id, since=now))

    run_in_transaction(db, body)
    logger.info("Friend request %s accepted by %s", request_id, caller_id)


def reject_friend_request(db: Session, caller_id: str, request_id: str) -> None:
    def body(tx: Session) -> None:
        request = _get_request(tx, request_id)
        if request.to_uid != caller_id:
            raise PermissionDenied("Not authorized to reject this request")
        _check_pending(request)

        request.status = FriendRequestStatus.rejected
        request.updated_at = datetime.now(timezone.utc)

    run_in_transaction(db, body)
    logger.info("Friend request %s rejected by %s", request_id, caller_id)


def cancel_friend_request(db: Session, caller_id: str, request_id: str) -> None:
    def body(tx: Session) -> None:
        request = _get_request(tx, request_id)
        if request.from_uid != caller_id:
            raise PermissionDenied("Not authorized to cancel this request")
        _check_pending(request)
        tx.delete(request)

    run_in_transaction(db, body)
    logger.info("Friend request %s cancelled by %s", request_id, caller_id)


def remove_friend(db: Session, caller_id: str, friend_uid: str) -> None:
    if not friend_uid:
        raise InvalidArgument("friend_uid required")

    def body(tx: Session) -> None:
        for key in ((caller_id, friend_uid), (friend_uid, caller_id)):
            row = tx.get(Friendship, key)
            if row:
                tx.delete(row)

    run_in_transaction(db, body)
    logger.info("Friendship removed between %s and %s", caller_id, friend_uid)


def list_friends(db: Session, user_id: str) -> list[Friendship]:
    return (
        db.query(Friendship)
        .filter(Friendship.user_id == user_id)
        .order_by(Friendship.since.desc())
        .all()
    )
