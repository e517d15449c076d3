"""Friend request API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventroster.auth import get_current_uid
from eventroster.database import get_db
from eventroster.schemas.friend import FriendOut, FriendRequestCreate, FriendRequestOut
from eventroster.schemas.membership import OperationResult
from eventroster.services import friend_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[FriendOut])
def list_friends(uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    return friend_service.list_friends(db, uid)


@router.post("/requests", response_model=FriendRequestOut, status_code=status.HTTP_201_CREATED)
def send_friend_request(
    payload: FriendRequestCreate,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
):
    return friend_service.send_friend_request(db, uid, payload.to_uid, payload.sender_name, payload.sender_avatar)


@router.post("/requests/{request_id}/accept", response_model=OperationResult)
def accept_friend_request(request_id: str, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    friend_service.accept_friend_request(db, uid, request_id)
    return OperationResult()


@router.post("/requests/{request_id}/reject", response_model=OperationResult)
def reject_friend_request(request_id: str, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    friend_service.reject_friend_request(db, uid, request_id)
    return OperationResult()


@router.delete("/requests/{request_id}", response_model=OperationResult)
def cancel_friend_request(request_id: str, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    friend_service.cancel_friend_request(db, uid, request_id)
    return OperationResult()


@router.delete("/{friend_uid}", response_model=OperationResult)
def remove_friend(friend_uid: str, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    friend_service.remove_friend(db, uid, friend_uid)
    return OperationResult()
