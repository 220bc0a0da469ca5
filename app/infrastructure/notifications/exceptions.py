"""Exceptions raised by the notification dispatch engine.

Suppression and target-event filtering are normal outcomes and never raise.
Everything below is fatal for the dispatch it occurs in and is never retried
by the engine itself.
"""

from typing import TYPE_CHECKING, Iterable, Optional, Sequence

if TYPE_CHECKING:
    from infrastructure.notifications.models import DeliveryResult


class NotificationError(Exception):
    """Base exception for all notification dispatch errors.

    Example:
        try:
            dispatcher.notify(provider, notifier, event)
        except NotificationError as e:
            logger.error("dispatch_failed", error=str(e))
    """

    pass


class UnknownProviderKindError(NotificationError):
    """Raised when a provider kind has no known variant or no adapter.

    Raised while constructing a NotifierProvider, so a bad configuration
    fails when it is loaded rather than at the first dispatch. Deliberately
    not a ValueError, so that pydantic propagates it unwrapped.
    """

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unknown provider kind: {kind!r}")


class ConfigurationError(NotificationError):
    """Raised when channel settings are missing or malformed.

    Attributes:
        channel: Channel kind whose configuration failed
        missing_keys: Settings keys that were required but absent
    """

    def __init__(
        self,
        message: str,
        channel: Optional[str] = None,
        missing_keys: Iterable[str] = (),
    ):
        self.channel = channel
        self.missing_keys = tuple(missing_keys)
        super().__init__(message)


class NoTemplateError(NotificationError):
    """Raised when no template candidate exists for a channel.

    Attributes:
        channel: Channel kind templates were looked up for
        candidates: Template names tried, in order
    """

    def __init__(self, channel: str, candidates: Sequence[str]):
        self.channel = channel
        self.candidates = tuple(candidates)
        super().__init__(
            f"No template for channel {channel!r} (tried: {', '.join(self.candidates)})"
        )


class TemplateRenderError(NotificationError):
    """Raised when a template exists but cannot be loaded or rendered."""

    pass


class DeliveryError(NotificationError):
    """Raised when a channel transport fails to deliver.

    Attributes:
        channel: Channel kind that failed
        error_code: Machine error code from the transport (e.g. HTTP_500)
        status_code: HTTP status of the failed response, if any
        retry_after: Seconds the transport asked callers to wait (HTTP 429)
    """

    def __init__(
        self,
        message: str,
        channel: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        retry_after: Optional[int] = None,
    ):
        self.channel = channel
        self.error_code = error_code
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(message)


class AuditWriteError(NotificationError):
    """Raised when delivery succeeded but the audit record could not be written.

    The message has already left; ``delivery`` describes it so the caller
    can reconcile the missing audit record.
    """

    def __init__(self, message: str, delivery: "DeliveryResult"):
        self.delivery = delivery
        super().__init__(message)
