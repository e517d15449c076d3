"""Pydantic schemas for friend requests."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class FriendRequestCreate(BaseModel):
    to_uid: str
    sender_name: Optional[str] = None
    sender_avatar: Optional[str] = None


class FriendRequestOut(BaseModel):
    request_id: str
    from_uid: str
    to_uid: str
    status: str
    from_name: Optional[str] = None
    from_avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class FriendOut(BaseModel):
    friend_id: str
    since: datetime

    model_config = {"from_attributes": True}
