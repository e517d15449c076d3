"""Pydantic schemas for membership operations."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class OperationResult(BaseModel):
    success: bool = True


class RejectPayload(BaseModel):
    note: Optional[str] = None


class JoinRequestOut(BaseModel):
    request_id: str
    event_id: str
    user_id: str
    status: str
    created_at: datetime
    response_note: Optional[str] = None
    responded_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class JoinedEventOut(BaseModel):
    event_id: str
    joined_at: datetime

    model_config = {"from_attributes": True}
