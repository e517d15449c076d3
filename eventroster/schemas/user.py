"""Pydantic schemas for Users."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    avatar: Optional[str] = None


class UserOut(BaseModel):
    user_id: str
    username: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
