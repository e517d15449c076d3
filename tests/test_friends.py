"""Tests for the friend request lifecycle and the symmetric friendship index."""
from eventroster.models.friend import Friendship
from tests.conftest import auth_headers


def _send(client, from_uid, to_uid, **extra):
    return client.post("/api/friends/requests", json={"to_uid": to_uid, **extra}, headers=auth_headers(from_uid))


def _friends_of(client, uid):
    resp = client.get("/api/friends/", headers=auth_headers(uid))
    assert resp.status_code == 200
    return [f["friend_id"] for f in resp.json()]


class TestFriendRequests:

    def test_send_and_accept_creates_both_directions(self, client, db):
        req = _send(client, "ann", "ben", sender_name="Ann").json()
        assert req["status"] == "pending"
        assert req["from_name"] == "Ann"

        resp = client.post(f"/api/friends/requests/{req['request_id']}/accept", headers=auth_headers("ben"))
        assert resp.status_code == 200

        assert db.get(Friendship, ("ann", "ben")) is not None
        assert db.get(Friendship, ("ben", "ann")) is not None
        assert _friends_of(client, "ann") == ["ben"]
        assert _friends_of(client, "ben") == ["ann"]

    def test_cannot_befriend_self(self, client):
        assert _send(client, "ann", "ann").status_code == 400

    def test_duplicate_pending_request(self, client):
        _send(client, "ann", "ben")
        resp = _send(client, "ann", "ben")
        assert resp.status_code == 409
        assert resp.json()["detail"]["code"] == "already-exists"

    def test_request_to_existing_friend(self, client):
        req = _send(client, "ann", "ben").json()
        client.post(f"/api/friends/requests/{req['request_id']}/accept", headers=auth_headers("ben"))
        resp = _send(client, "ann", "ben")
        assert resp.status_code == 409
        assert resp.json()["detail"]["message"] == "Already friends"

    def test_only_recipient_accepts(self, client):
        req = _send(client, "ann", "ben").json()
        resp = client.post(f"/api/friends/requests/{req['request_id']}/accept", headers=auth_headers("ann"))
        assert resp.status_code == 403
        assert _friends_of(client, "ann") == []

    def test_reject_then_accept_fails(self, client):
        req = _send(client, "ann", "ben").json()
        assert client.post(f"/api/friends/requests/{req['request_id']}/reject",
                           headers=auth_headers("ben")).status_code == 200
        resp = client.post(f"/api/friends/requests/{req['request_id']}/accept", headers=auth_headers("ben"))
        assert resp.status_code == 409

    def test_sender_cancels(self, client):
        req = _send(client, "ann", "ben").json()
        assert client.delete(f"/api/friends/requests/{req['request_id']}",
                             headers=auth_headers("ben")).status_code == 403
        assert client.delete(f"/api/friends/requests/{req['request_id']}",
                             headers=auth_headers("ann")).status_code == 200
        resp = client.post(f"/api/friends/requests/{req['request_id']}/accept", headers=auth_headers("ben"))
        assert resp.status_code == 404

    def test_remove_friend_deletes_both_directions(self, client, db):
        req = _send(client, "ann", "ben").json()
        client.post(f"/api/friends/requests/{req['request_id']}/accept", headers=auth_headers("ben"))

        resp = client.delete("/api/friends/ben", headers=auth_headers("ann"))
        assert resp.status_code == 200
        assert db.get(Friendship, ("ann", "ben")) is None
        assert db.get(Friendship, ("ben", "ann")) is None

    def test_remove_non_friend_is_noop(self, client):
        assert client.delete("/api/friends/stranger", headers=auth_headers("ann")).status_code == 200
