"""Tests for the entity store adapter — conversion, validation and failures."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from qplan.exceptions import MalformedRecord, NotFound, StoreUnavailable
from qplan.models.resource import ResourceStatus
from qplan.models.resource_request import RequestStatus
from qplan.schemas.resource_request import ResourceRequestDraft
from qplan.store.timestamps import from_store_timestamp, to_store_timestamp
from tests.conftest import insert_resource


class TestEvents:
    """Create / list / delete events."""

    def test_create_then_list_round_trips_fields_and_date(self, store):
        date = datetime(2026, 11, 3, 9, 30, 15, tzinfo=timezone(timedelta(hours=2)))
        created = store.create_event("Quantum Seminar", "Error correction basics", date)

        events = store.list_events()
        assert len(events) == 1
        listed = events[0]
        assert listed.id == created.id
        assert listed.title == "Quantum Seminar"
        assert listed.description == "Error correction basics"
        assert listed.date == date
        assert listed.date.replace(microsecond=0) == date.replace(microsecond=0)
        assert listed.date.tzinfo is not None

    def test_naive_date_is_taken_as_utc(self, store):
        store.create_event("Standup", "", datetime(2026, 12, 1, 8, 0))
        listed = store.list_events()[0]
        assert listed.date == datetime(2026, 12, 1, 8, 0, tzinfo=timezone.utc)

    def test_list_is_ordered_by_date(self, store):
        base = datetime(2026, 11, 1, tzinfo=timezone.utc)
        store.create_event("Later", "", base + timedelta(days=3))
        store.create_event("Sooner", "", base + timedelta(days=1))
        assert [e.title for e in store.list_events()] == ["Sooner", "Later"]

    def test_start_after_filters_past_events(self, store):
        now = datetime.now(timezone.utc)
        store.create_event("Past", "", now - timedelta(days=1))
        store.create_event("Future", "", now + timedelta(days=1))
        assert [e.title for e in store.list_events(start_after=now)] == ["Future"]

    def test_delete_event(self, store):
        event = store.create_event("Gone", "", datetime(2026, 11, 1, tzinfo=timezone.utc))
        store.delete_event(event.id)
        assert store.list_events() == []

    def test_delete_missing_event(self, store):
        with pytest.raises(NotFound):
            store.delete_event("does-not-exist")

    def test_missing_field_is_a_malformed_record(self, store, db):
        """An event written by another client without a description fails validation on read."""
        db.execute(text(
            "INSERT INTO events (id, title, description, date) "
            "VALUES ('e-bad', 'Orphan', NULL, '2026-11-01 10:00:00.000000')"
        ))
        db.commit()

        with pytest.raises(MalformedRecord) as exc_info:
            store.list_events()
        assert exc_info.value.collection == "events"
        assert exc_info.value.record_id == "e-bad"


class TestResources:
    def test_create_and_list(self, store):
        store.create_resource("Quantum Rig A-1", "Lab 3", ResourceStatus.available)
        store.create_resource("Cryostat B", "Lab 1", ResourceStatus.unavailable)

        resources = store.list_resources()
        assert [(r.name, r.status) for r in resources] == [
            ("Cryostat B", "Unavailable"),
            ("Quantum Rig A-1", "Available"),
        ]

    def test_set_resource_status(self, store):
        resource = store.create_resource("Quantum Rig A-1", "Lab 3")
        store.set_resource_status(resource.id, ResourceStatus.unavailable)
        assert store.get_resource(resource.id).status == "Unavailable"

    def test_set_status_of_missing_resource(self, store):
        with pytest.raises(NotFound):
            store.set_resource_status("nope", ResourceStatus.available)

    def test_unknown_status_is_a_malformed_record(self, store, db):
        """A row written by another client with a third status is rejected on read."""
        db.execute(text(
            "INSERT INTO resources (id, name, location, status) "
            "VALUES ('bad', 'Mystery Box', 'Basement', 'Reserved')"
        ))
        db.commit()

        with pytest.raises(MalformedRecord) as exc_info:
            store.list_resources()
        assert exc_info.value.collection == "resources"
        assert exc_info.value.record_id == "bad"


class TestRequests:
    def _draft(self, user_id="alex", resource_id="r1"):
        return ResourceRequestDraft(
            resource_id=resource_id,
            resource_name="Quantum Rig A-1",
            user_id=user_id,
            user_name="Alex",
        )

    def test_pending_list_only_contains_pending(self, store, db):
        insert_resource(db)
        kept = store.create_request(self._draft(user_id="alex"))
        denied = store.create_request(self._draft(user_id="sam"))
        store.deny(denied.id)

        pending = store.list_pending_requests()
        assert [r.id for r in pending] == [kept.id]
        assert {r.id for r in store.list_requests()} == {kept.id, denied.id}
        assert [r.id for r in store.list_requests(RequestStatus.denied)] == [denied.id]

    def test_pending_list_keeps_submission_order(self, store):
        first = store.create_request(self._draft(user_id="alex"))
        second = store.create_request(self._draft(user_id="sam"))
        third = store.create_request(self._draft(user_id="kim"))

        assert [r.id for r in store.list_pending_requests()] == [first.id, second.id, third.id]

    def test_request_timestamps_are_aware_utc(self, store, db):
        insert_resource(db)
        created = store.create_request(self._draft())
        assert created.created_at.tzinfo is not None

        store.approve(created.id, "r1")
        approved = store.get_request(created.id)
        assert approved.created_at.tzinfo is not None
        assert approved.decided_at.tzinfo is not None
        assert approved.decided_at.utcoffset() == timedelta(0)
        assert approved.decided_at >= approved.created_at

    def test_find_pending_request(self, store):
        created = store.create_request(self._draft())
        assert store.find_pending_request("alex", "r1").id == created.id
        assert store.find_pending_request("alex", "r2") is None
        assert store.find_pending_request("sam", "r1") is None

    def test_delete_request(self, store):
        created = store.create_request(self._draft())
        store.delete_request(created.id)
        assert store.list_pending_requests() == []
        with pytest.raises(NotFound):
            store.get_request(created.id)

    def test_unknown_request_status_is_malformed(self, store, db):
        db.execute(text(
            'INSERT INTO "resourceRequests" (id, "resourceId", "resourceName", "userId", "userName", status) '
            "VALUES ('q1', 'r1', 'Quantum Rig A-1', 'alex', 'Alex', 'maybe')"
        ))
        db.commit()
        with pytest.raises(MalformedRecord):
            store.get_request("q1")


class TestStoreFailures:
    def test_read_failure_surfaces_as_store_unavailable(self, store, fail_statements):
        fail_statements.append("SELECT")
        with pytest.raises(StoreUnavailable):
            store.list_events()

    def test_write_failure_is_not_applied(self, store, fail_statements):
        fail_statements.append("INSERT INTO events")
        with pytest.raises(StoreUnavailable):
            store.create_event("Doomed", "", datetime(2026, 11, 1, tzinfo=timezone.utc))
        fail_statements.clear()
        assert store.list_events() == []


class TestTimestamps:
    def test_aware_values_are_normalised_to_utc(self):
        local = datetime(2026, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
        stored = to_store_timestamp(local)
        assert stored.tzinfo == timezone.utc
        assert stored.hour == 17
        assert from_store_timestamp(stored.replace(tzinfo=None)) == local
