"""Tests for event creation normalization — fills gaps, never overwrites."""
from datetime import datetime, timezone

from sqlalchemy import insert

from eventroster.models.event import Event
from eventroster.services import membership_service
from eventroster.services.event_triggers import backfill_events, normalize_event
from tests.conftest import create_test_event


class TestNormalizeEvent:

    def test_fills_missing_fields(self):
        ev = Event(title="Bare", creator_id="host")
        filled = normalize_event(ev)

        assert set(filled) == {"event_id", "created_at", "attendees", "users_joined"}
        assert ev.event_id
        assert ev.created_at is not None
        assert ev.attendees == []
        assert ev.users_joined == []

    def test_keeps_supplied_values(self):
        created = datetime(2026, 1, 1, tzinfo=timezone.utc)
        ev = Event(
            event_id="given-id",
            title="Seeded",
            creator_id="host",
            created_at=created,
            attendees=["host"],
            users_joined=[{"uid": "host", "username": "Host", "avatar": None}],
        )
        assert normalize_event(ev) == []
        assert ev.event_id == "given-id"
        assert ev.created_at == created
        assert ev.attendees == ["host"]

    def test_is_idempotent(self):
        ev = Event(title="Twice", creator_id="host")
        normalize_event(ev)
        first_id = ev.event_id
        assert normalize_event(ev) == []
        assert ev.event_id == first_id


class TestCreationTrigger:

    def test_api_created_event_is_initialized(self, client):
        event = create_test_event(client, "host", title="Picnic")
        assert event["event_id"]
        assert event["created_at"] is not None
        assert event["attendees"] == []
        assert event["users_joined"] == []
        assert event["creator_id"] == "host"

    def test_client_supplied_id_is_kept(self, client):
        event = create_test_event(client, "host", event_id="picnic-2026")
        assert event["event_id"] == "picnic-2026"

    def test_new_event_is_immediately_joinable(self, db):
        ev = Event(title="Fresh", creator_id="host")
        db.add(ev)
        db.commit()
        assert membership_service.join_event(db, "alice", ev.event_id) == "joined"

    def test_backfill_rows_written_outside_orm(self, db):
        db.execute(insert(Event.__table__).values(
            event_id="raw", title="Raw", creator_id="host", is_private=False, version=1,
        ))
        db.commit()

        assert backfill_events(db) == 1
        stored = db.get(Event, "raw")
        assert stored.attendees == []
        assert stored.users_joined == []
        assert stored.created_at is not None
        assert backfill_events(db) == 0
