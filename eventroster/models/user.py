"""User profile ORM model — source of the display snapshot copied on join."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from eventroster.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(128), primary_key=True)  # auth uid
    username = Column(String(100), nullable=True)
    avatar = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
