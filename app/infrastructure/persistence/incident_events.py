"""Incident event store.

The store owns appends to an incident's event history. Appends must be
safe when several dispatches for the same incident finish at once; each
successful delivery issues exactly one append and never reads back first.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

import structlog

from models.incidents import Event, EventKind, Incident

logger = structlog.get_logger(__name__)


class IncidentEventStore(ABC):
    """Append-only access to incident event histories."""

    @abstractmethod
    def append_event(
        self,
        incident: Incident,
        kind: EventKind,
        info: Optional[Mapping[str, Any]] = None,
        escalated_to: Optional[str] = None,
    ) -> Event:
        """Create an event of ``kind`` on ``incident`` and persist it.

        ``escalated_to`` is only accepted for ESCALATED events.

        Returns:
            The appended Event.
        """
        pass

    @abstractmethod
    def events_for(self, incident: Incident) -> List[Event]:
        """Return a snapshot of the incident's events, oldest first."""
        pass


class InMemoryIncidentEventStore(IncidentEventStore):
    """Thread-safe store keeping events on the Incident objects themselves.

    A single lock serializes appends so concurrent dispatches never lose an
    audit record.

    Example:
        store = InMemoryIncidentEventStore()
        event = store.append_event(incident, EventKind.OPENED)
    """

    def __init__(self):
        self._lock = threading.Lock()

    def append_event(
        self,
        incident: Incident,
        kind: EventKind,
        info: Optional[Mapping[str, Any]] = None,
        escalated_to: Optional[str] = None,
    ) -> Event:
        event = Event(
            kind=kind,
            incident=incident,
            escalated_to=escalated_to,
            info=dict(info or {}),
        )
        with self._lock:
            incident.events.append(event)
            count = len(incident.events)

        logger.debug(
            "incident_event_appended",
            incident_id=incident.id,
            event_id=event.id,
            kind=event.kind.value,
            event_count=count,
        )
        return event

    def events_for(self, incident: Incident) -> List[Event]:
        with self._lock:
            return list(incident.events)

