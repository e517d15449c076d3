"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, model_validator

from eventroster.models.event import Event
from eventroster.services.membership_service import visible_users_joined


class EventCreate(BaseModel):
    event_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    is_private: bool = False


class UserSnapshot(BaseModel):
    uid: str
    username: str
    avatar: Optional[str] = None


class EventOut(BaseModel):
    event_id: str
    title: str
    description: Optional[str] = None
    creator_id: str
    capacity: Optional[int] = None
    effective_capacity: int
    is_private: bool
    attendees: list[str] = []
    users_joined: list[UserSnapshot] = []
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def _reconcile_snapshots(cls, data: Any) -> Any:
        # Filter-on-read: stale snapshots of departed members are never shown
        if isinstance(data, Event):
            return {
                "event_id": data.event_id,
                "title": data.title,
                "description": data.description,
                "creator_id": data.creator_id,
                "capacity": data.capacity,
                "effective_capacity": data.effective_capacity,
                "is_private": data.is_private,
                "attendees": data.attendees or [],
                "users_joined": visible_users_joined(data),
                "created_at": data.created_at,
            }
        return data
