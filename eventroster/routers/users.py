"""User API routes — caller profile and the joined-events index."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventroster.auth import get_current_uid
from eventroster.database import get_db
from eventroster.errors import NotFound
from eventroster.models.user import User
from eventroster.schemas.membership import JoinedEventOut
from eventroster.schemas.user import ProfileUpdate, UserOut
from eventroster.services import membership_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.put("/me", response_model=UserOut)
def upsert_profile(payload: ProfileUpdate, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Create or update the caller's profile (partial update)."""
    user = db.get(User, uid)
    if not user:
        user = User(user_id=uid)
        db.add(user)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("Updated profile %s", uid)
    return user


@router.get("/me/joined-events", response_model=list[JoinedEventOut])
def my_joined_events(uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """Events the caller has joined, newest first."""
    return membership_service.list_joined_events(db, uid)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Fetch a single user profile."""
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user
