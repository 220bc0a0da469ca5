"""Persistence layer for incident event histories.

Provides the store interface the notification engine appends audit records
through, and an in-memory implementation.
"""

from infrastructure.persistence.incident_events import (
    IncidentEventStore,
    InMemoryIncidentEventStore,
)

__all__ = ["IncidentEventStore", "InMemoryIncidentEventStore"]
