"""Pydantic schemas for moderation reports."""
from pydantic import BaseModel


class ReportCreate(BaseModel):
    type: str  # post, comment, user, event
    target_id: str
    reason: str
