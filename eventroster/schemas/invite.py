"""Pydantic schemas for Invites and invite codes."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from eventroster.schemas.event import EventOut


class InviteCreate(BaseModel):
    event_id: str
    to_user_id: str
    message: Optional[str] = None


class InviteRespond(BaseModel):
    status: str  # accepted, declined


class InviteOut(BaseModel):
    invite_id: str
    event_id: str
    from_user_id: str
    to_user_id: str
    message: Optional[str] = None
    status: str
    event_title: Optional[str] = None
    from_user_name: Optional[str] = None
    created_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InviteCodeCreate(BaseModel):
    event_id: str
    ttl_hours: Optional[int] = Field(None, ge=0)


class InviteCodeOut(BaseModel):
    code: str
    event_id: str
    expires_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InviteCodeRedeem(BaseModel):
    code: str


class RedeemResult(BaseModel):
    outcome: str  # joined, already_member, requested
    event: EventOut
