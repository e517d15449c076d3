"""Tests for caller identity and profile routes."""
from jose import jwt

from eventroster.config import settings
from tests.conftest import auth_headers, set_profile


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_upsert_profile_then_partial_update(client):
    created = set_profile(client, "alice", "Alice", "https://img/a.png")
    assert created["user_id"] == "alice"

    resp = client.put("/api/users/me", json={"username": "Alicia"}, headers=auth_headers("alice"))
    assert resp.status_code == 200
    assert resp.json()["username"] == "Alicia"
    assert resp.json()["avatar"] == "https://img/a.png"

    assert client.get("/api/users/alice").json()["username"] == "Alicia"


def test_get_unknown_user(client):
    resp = client.get("/api/users/nobody")
    assert resp.status_code == 404
    assert resp.json()["detail"] == {"code": "not-found", "message": "User not found"}


def test_missing_token(client):
    resp = client.put("/api/users/me", json={"username": "x"})
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "unauthenticated"


def test_token_signed_with_wrong_secret(client):
    token = jwt.encode({"sub": "mallory"}, "not-the-secret", algorithm=settings.AUTH_JWT_ALGORITHM)
    resp = client.put("/api/users/me", json={"username": "x"}, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_without_sub(client):
    token = jwt.encode({"name": "anon"}, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)
    resp = client.put("/api/users/me", json={"username": "x"}, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"]["message"] == "Token missing sub"
