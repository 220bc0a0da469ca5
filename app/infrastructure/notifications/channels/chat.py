"""Chat channel implementation using HipChat rooms."""

from typing import Any, Dict, Optional

import structlog
from pydantic import BaseModel, ConfigDict, field_validator

from infrastructure.configuration import settings as app_settings
from infrastructure.notifications.channels.base import ChannelAdapter
from infrastructure.notifications.exceptions import DeliveryError
from infrastructure.notifications.models import DeliveryResult, ProviderKind
from integrations.hipchat import HipChatClient
from models.incidents import Event, EventKind

logger = structlog.get_logger()

# Only these kinds have a room color; anything else is not posted.
COLORS: Dict[EventKind, str] = {
    EventKind.OPENED: "red",
    EventKind.ACKNOWLEDGED: "yellow",
    EventKind.ESCALATED: "yellow",
    EventKind.RESOLVED: "green",
}


class ChatConfig(BaseModel):
    """Settings for posting to a HipChat room."""

    api_token: str
    room: str
    api_version: str = "v2"
    notify: bool = False

    model_config = ConfigDict(extra="ignore")

    @field_validator("room", mode="before")
    @classmethod
    def coerce_room(cls, v: Any) -> Any:
        # Room ids are often configured as integers.
        return str(v) if isinstance(v, int) else v

    @field_validator("api_version", mode="before")
    @classmethod
    def normalize_api_version(cls, v: Any) -> str:
        if v is None:
            return "v2"
        return "v1" if str(v).lower() in ("1", "v1") else "v2"

    @field_validator("notify", mode="before")
    @classmethod
    def coerce_notify(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes", "on")
        return bool(v)


class ChatChannel(ChannelAdapter):
    """HipChat room channel.

    Posts the rendered body to the configured room with a color chosen from
    the event kind. Kinds without a color are skipped without contacting
    HipChat.
    """

    kind = ProviderKind.CHAT
    config_model = ChatConfig
    DEFAULT_TARGET_EVENTS = frozenset(
        {
            EventKind.ESCALATED,
            EventKind.OPENED,
            EventKind.ACKNOWLEDGED,
            EventKind.RESOLVED,
        }
    )

    def __init__(
        self,
        settings,
        client: Optional[HipChatClient] = None,
        sender_name: Optional[str] = None,
    ):
        super().__init__(settings)
        self._client = client or HipChatClient()
        self.sender_name = (
            sender_name or app_settings.notifications.NOTIFICATION_SENDER_NAME
        )

    @staticmethod
    def color_for(kind: EventKind) -> Optional[str]:
        return COLORS.get(kind)

    def deliver(self, kind: EventKind, body: str, event: Event) -> DeliveryResult:
        color = self.color_for(kind)
        if color is None:
            logger.info(
                "chat_message_skipped",
                kind=kind.value,
                event_id=event.id,
                reason="no_color",
            )
            return DeliveryResult.skipped(self.kind, f"No chat color for {kind.value}")

        result = self._client.send_room_message(
            api_token=self.config.api_token,
            room=self.config.room,
            message=body,
            color=color,
            notify=self.config.notify,
            from_name=self.sender_name,
            api_version=self.config.api_version,
        )

        if not result.is_success:
            logger.error(
                "chat_message_failed",
                room=self.config.room,
                error_code=result.error_code,
                error=result.message,
            )
            raise DeliveryError(
                f"HipChat delivery failed: {result.message}",
                channel=self.kind.value,
                error_code=result.error_code,
                status_code=result.status_code,
                retry_after=result.retry_after,
            )

        logger.info(
            "chat_message_sent",
            room=self.config.room,
            color=color,
            kind=kind.value,
        )
        return DeliveryResult.delivered(
            self.kind,
            f"Posted to room {self.config.room}",
            platform_response=result.data,
        )
