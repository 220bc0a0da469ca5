"""File channel: reserved for archiving notifications to disk."""

import structlog
from infrastructure.notifications.channels.base import ChannelAdapter
from infrastructure.notifications.models import DeliveryResult, ProviderKind
from models.incidents import Event, EventKind

logger = structlog.get_logger()


class FileChannel(ChannelAdapter):
    """No-op channel.

    Accepts no kinds unless the settings list ``events`` explicitly. Delivery
    writes nothing yet but still counts as delivered, so it is audited.
    """

    kind = ProviderKind.FILE

    def deliver(self, kind: EventKind, body: str, event: Event) -> DeliveryResult:
        logger.debug("file_channel_noop", kind=kind.value, event_id=event.id)
        return DeliveryResult.delivered(self.kind, "File channel wrote nothing")
