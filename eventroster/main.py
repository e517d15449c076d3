"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from eventroster.config import settings
from eventroster.database import Base, engine

# Import routers
from eventroster.routers import users, events, membership, invites, friends, reports

# Import all models so Base.metadata knows about them
from eventroster.models.user import User                         # noqa: F401
from eventroster.models.event import Event                       # noqa: F401
from eventroster.models.join_request import JoinRequest          # noqa: F401
from eventroster.models.joined_event import UserJoinedEvent      # noqa: F401
from eventroster.models.invite import Invite, InviteCode         # noqa: F401
from eventroster.models.friend import FriendRequest, Friendship  # noqa: F401
from eventroster.models.report import Report                     # noqa: F401

# Registers the event creation trigger
from eventroster.services import event_triggers                  # noqa: F401

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(
    title="Event Roster",
    description="Membership core for events: join, leave, join requests, invites",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(membership.router, prefix="/api/events", tags=["Membership"])
app.include_router(invites.router, prefix="/api/invites", tags=["Invites"])
app.include_router(invites.codes_router, prefix="/api/invite-codes", tags=["Invites"])
app.include_router(friends.router, prefix="/api/friends", tags=["Friends"])
app.include_router(reports.router, prefix="/api/reports", tags=["Moderation"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
