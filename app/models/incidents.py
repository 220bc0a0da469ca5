import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class IncidentStatus(str, Enum):
    """Lifecycle status of an incident. Only OPENED counts as open."""

    OPENED = "opened"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"


class EventKind(str, Enum):
    """Kinds of incident events.

    ESCALATED_TO_ME never appears on a stored event; it is the contextual
    kind an ESCALATED event takes for the person it was escalated to.
    NOTIFIED is the audit record written after a successful delivery.
    """

    ESCALATED = "escalated"
    ESCALATED_TO_ME = "escalated_to_me"
    OPENED = "opened"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"
    COMMENTED = "commented"
    NOTIFIED = "notified"


# Every contextual kind a channel can be asked to deliver.
ALL_EVENTS = frozenset(
    {
        EventKind.ESCALATED,
        EventKind.ESCALATED_TO_ME,
        EventKind.OPENED,
        EventKind.ACKNOWLEDGED,
        EventKind.RESOLVED,
        EventKind.COMMENTED,
    }
)


class Incident(BaseModel):
    """Incident with its append-only event history.

    ``events`` is owned by the incident; new entries are appended through an
    IncidentEventStore, never edited in place.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    subject: str
    status: IncidentStatus = IncidentStatus.OPENED
    events: List["Event"] = Field(default_factory=list, repr=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(extra="forbid")

    @property
    def is_open(self) -> bool:
        return self.status == IncidentStatus.OPENED


class Event(BaseModel):
    """Immutable incident event.

    Attributes:
        id: Event identifier, referenced by the voice call callback URL
        kind: Stored event kind (never ESCALATED_TO_ME)
        incident: Owning incident, left out of dumps in favour of incident_id
        escalated_to: Identity the incident was escalated to (ESCALATED only)
        info: Free-form payload; for NOTIFIED events the audit details
        created_at: Creation timestamp (UTC)
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    kind: EventKind
    incident: Incident = Field(exclude=True, repr=False)
    escalated_to: Optional[str] = None
    info: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("kind")
    @classmethod
    def reject_contextual_kind(cls, v: EventKind) -> EventKind:
        if v == EventKind.ESCALATED_TO_ME:
            raise ValueError("escalated_to_me is a contextual kind, not an event kind")
        return v

    @model_validator(mode="after")
    def check_escalation_target(self) -> "Event":
        if self.escalated_to is not None and self.kind != EventKind.ESCALATED:
            raise ValueError(
                f"escalated_to is only valid on escalated events, got {self.kind.value}"
            )
        return self

    @computed_field
    @property
    def incident_id(self) -> str:
        return self.incident.id

    @property
    def is_escalated(self) -> bool:
        return self.kind == EventKind.ESCALATED


Incident.model_rebuild()
