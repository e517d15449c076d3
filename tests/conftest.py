"""Pytest fixtures — file-backed SQLite database, recreated for every test."""
import pytest
from jose import jwt
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from eventroster.config import settings
from eventroster.database import Base, get_db
from eventroster.main import app

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode so concurrent sessions can read while one writes
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def auth_headers(uid: str) -> dict:
    """Bearer header carrying a token for ``uid``."""
    token = jwt.encode({"sub": uid}, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


def create_test_event(client: TestClient, host: str, title: str = "Test Event", **fields) -> dict:
    """POST /api/events as ``host`` and return response JSON."""
    resp = client.post("/api/events/", json={"title": title, **fields}, headers=auth_headers(host))
    assert resp.status_code == 201, resp.text
    return resp.json()


def set_profile(client: TestClient, uid: str, username: str, avatar: str = None) -> dict:
    """PUT /api/users/me and return response JSON."""
    resp = client.put("/api/users/me", json={"username": username, "avatar": avatar}, headers=auth_headers(uid))
    assert resp.status_code == 200, resp.text
    return resp.json()


def join(client: TestClient, uid: str, event_id: str):
    return client.post(f"/api/events/{event_id}/join", headers=auth_headers(uid))


def get_event(client: TestClient, event_id: str) -> dict:
    resp = client.get(f"/api/events/{event_id}")
    assert resp.status_code == 200, resp.text
    return resp.json()
