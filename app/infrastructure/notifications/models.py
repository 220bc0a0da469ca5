"""Notification system core models.

Providers (configured channel instances), notifiers (a person's
subscription to a provider) and the results of delivery and dispatch.

Uses Pydantic BaseModel for:
- Fail-fast validation of provider kinds at construction time
- Immutable provider/notifier configuration during dispatch
- Serializable dispatch results for logging and callers
"""

import uuid
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.notifications.exceptions import UnknownProviderKindError
from models.incidents import Event, EventKind


class ProviderKind(str, Enum):
    """Closed set of delivery channel variants."""

    MAIL = "mail"
    FILE = "file"
    INTERNAL_LOG = "internal_log"
    CHAT = "chat"
    VOICE_CALL = "voice_call"


def _empty_settings(v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {} if v is None else v


class NotifierProvider(BaseModel):
    """A configured channel instance, e.g. one HipChat room integration.

    ``kind`` is validated when the provider is built: an unknown kind raises
    UnknownProviderKindError immediately. The model is frozen, so the kind
    cannot change after construction.

    Attributes:
        id: Provider identifier
        name: Human-readable label
        kind: Channel variant
        settings: Provider-wide channel settings (may be empty)

    Example:
        provider = NotifierProvider(
            kind="chat",
            settings={"api_token": "t0k3n", "room": "ops"},
        )
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    kind: ProviderKind
    settings: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, v: Any) -> ProviderKind:
        """Reject unknown kinds with UnknownProviderKindError."""
        if isinstance(v, ProviderKind):
            return v
        try:
            return ProviderKind(v)
        except ValueError:
            raise UnknownProviderKindError(v) from None

    @field_validator("settings", mode="before")
    @classmethod
    def validate_settings(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return _empty_settings(v)


class Notifier(BaseModel):
    """A person's subscription to a provider.

    Notifier settings overlay the provider's settings; on a key present in
    both, the notifier's value wins.

    Attributes:
        id: Notifier identifier
        user: Identity of the subscribed person
        provider_id: Provider this subscription belongs to
        settings: Personal overrides (e.g. "to", "events", "or_conditions")
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user: str
    provider_id: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("settings", mode="before")
    @classmethod
    def validate_settings(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return _empty_settings(v)


def merge_settings(provider: NotifierProvider, notifier: Notifier) -> Mapping[str, Any]:
    """Overlay notifier settings on provider settings.

    Returns a read-only view computed fresh for each dispatch.
    """
    return MappingProxyType({**provider.settings, **notifier.settings})


class DeliveryStatus(Enum):
    """Outcome of a channel adapter's deliver()."""

    DELIVERED = "delivered"
    SKIPPED = "skipped"


class DeliveryResult(BaseModel):
    """Result of a channel delivery.

    Transport failures are raised as DeliveryError, so a DeliveryResult is
    always either a delivery or a deliberate channel-level skip.

    Attributes:
        channel: Channel kind that handled the delivery
        status: DELIVERED or SKIPPED
        message: Human-readable result message
        external_id: Identifier returned by the remote API (message/call id)
        platform_response: Raw remote API response (debugging)
    """

    channel: ProviderKind
    status: DeliveryStatus
    message: str
    external_id: Optional[str] = None
    platform_response: Optional[Any] = None

    @property
    def is_delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED

    @classmethod
    def delivered(
        cls,
        channel: ProviderKind,
        message: str,
        external_id: Optional[str] = None,
        platform_response: Optional[Any] = None,
    ) -> "DeliveryResult":
        return cls(
            channel=channel,
            status=DeliveryStatus.DELIVERED,
            message=message,
            external_id=external_id,
            platform_response=platform_response,
        )

    @classmethod
    def skipped(cls, channel: ProviderKind, message: str) -> "DeliveryResult":
        return cls(channel=channel, status=DeliveryStatus.SKIPPED, message=message)


class DispatchOutcome(Enum):
    """How a single (provider, notifier, event) dispatch ended.

    SUPPRESSED: a suppression gate vetoed delivery
    FILTERED: the contextual kind is not in the target events
    IGNORED: the event is an audit record and is never dispatched
    SKIPPED: the channel declined to send (e.g. chat with no color)
    DELIVERED: delivered by the channel
    FAILED: the dispatch raised (reported by NotificationService.notify_all)
    """

    SUPPRESSED = "suppressed"
    FILTERED = "filtered"
    IGNORED = "ignored"
    SKIPPED = "skipped"
    DELIVERED = "delivered"
    FAILED = "failed"


class DispatchResult(BaseModel):
    """Result of NotificationDispatcher.notify().

    Attributes:
        outcome: DispatchOutcome
        provider_id: Provider dispatched through
        notifier_id: Notifier dispatched to
        event_id: Event being notified about
        kind: Contextual event kind, when classification happened
        delivery: DeliveryResult, when the adapter ran
        audit_event: The appended NOTIFIED event, when written
        audited: Whether the audit record was written
        error: Error message (FAILED only)
        error_type: Exception class name (FAILED only)
    """

    outcome: DispatchOutcome
    provider_id: str
    notifier_id: str
    event_id: str
    kind: Optional[EventKind] = None
    delivery: Optional[DeliveryResult] = None
    audit_event: Optional[Event] = None
    audited: bool = False
    error: Optional[str] = None
    error_type: Optional[str] = None
