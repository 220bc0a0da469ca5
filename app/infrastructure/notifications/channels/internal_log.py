"""Internal log channel: writes notifications to the operational log."""

import structlog
from infrastructure.notifications.channels.base import ChannelAdapter
from infrastructure.notifications.models import DeliveryResult, ProviderKind
from models.incidents import ALL_EVENTS, Event, EventKind

logger = structlog.get_logger()


class InternalLogChannel(ChannelAdapter):
    """Logs the rendered body at INFO. Targets every event kind by default."""

    kind = ProviderKind.INTERNAL_LOG
    DEFAULT_TARGET_EVENTS = ALL_EVENTS

    def deliver(self, kind: EventKind, body: str, event: Event) -> DeliveryResult:
        logger.info(
            "incident_notification",
            body=body,
            kind=kind.value,
            event_id=event.id,
            incident_id=event.incident.id,
        )
        return DeliveryResult.delivered(self.kind, "Written to log")
