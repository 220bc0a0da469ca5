"""Unit tests for the in-memory incident event store."""

import inspect
from concurrent.futures import ThreadPoolExecutor

import pytest

from infrastructure.persistence import IncidentEventStore, InMemoryIncidentEventStore
from models.incidents import EventKind


@pytest.mark.unit
class TestInMemoryIncidentEventStore:
    def test_append_event(self, incident_factory):
        store = InMemoryIncidentEventStore()
        incident = incident_factory()

        event = store.append_event(incident, EventKind.NOTIFIED, {"provider": "p-1"})

        assert event.kind == EventKind.NOTIFIED
        assert event.incident is incident
        assert event.info == {"provider": "p-1"}
        assert store.events_for(incident) == [event]

    def test_info_copied(self, incident_factory):
        store = InMemoryIncidentEventStore()
        info = {"provider": "p-1"}

        event = store.append_event(incident_factory(), EventKind.NOTIFIED, info)
        info["provider"] = "changed"

        assert event.info == {"provider": "p-1"}

    def test_escalation(self, incident_factory):
        store = InMemoryIncidentEventStore()

        event = store.append_event(
            incident_factory(), EventKind.ESCALATED, escalated_to="bob"
        )

        assert event.escalated_to == "bob"

    def test_events_for_returns_snapshot(self, incident_factory):
        store = InMemoryIncidentEventStore()
        incident = incident_factory()
        snapshot = store.events_for(incident)

        store.append_event(incident, EventKind.COMMENTED)

        assert snapshot == []

    def test_concurrent_appends_all_recorded(self, incident_factory):
        store = InMemoryIncidentEventStore()
        incident = incident_factory()

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(
                pool.map(
                    lambda i: store.append_event(incident, EventKind.NOTIFIED, {"n": i}),
                    range(200),
                )
            )

        assert len(store.events_for(incident)) == 200
        assert sorted(e.info["n"] for e in store.events_for(incident)) == list(range(200))


@pytest.mark.unit
def test_in_memory_store_matches_store_interface():
    assert inspect.signature(InMemoryIncidentEventStore.append_event) == inspect.signature(
        IncidentEventStore.append_event
    )
