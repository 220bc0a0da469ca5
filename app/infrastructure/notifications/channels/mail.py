"""Mail channel implementation using Mailgun."""

from email.utils import parseaddr
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.configuration import settings as app_settings
from infrastructure.notifications.channels.base import ChannelAdapter
from infrastructure.notifications.exceptions import DeliveryError
from infrastructure.notifications.models import DeliveryResult, ProviderKind
from integrations.mailgun import MailgunClient
from models.incidents import Event, EventKind

logger = structlog.get_logger()


class MailConfig(BaseModel):
    """Settings for sending mail through Mailgun."""

    api_key: str
    sender: str = Field(alias="from")
    to: str

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("sender")
    @classmethod
    def sender_has_domain(cls, v: str) -> str:
        _, addr = parseaddr(v)
        if "@" not in addr or not addr.rsplit("@", 1)[1]:
            raise ValueError(f"from must be an email address, got {v!r}")
        return v


class MailChannel(ChannelAdapter):
    """Mailgun email channel.

    Sends the rendered body as plain text. The subject is the incident
    subject prefixed with the sender label, e.g. "[Waker] db down".
    """

    kind = ProviderKind.MAIL
    config_model = MailConfig
    DEFAULT_TARGET_EVENTS = frozenset({EventKind.ESCALATED_TO_ME})

    def __init__(
        self,
        settings,
        client: Optional[MailgunClient] = None,
        sender_name: Optional[str] = None,
    ):
        super().__init__(settings)
        self._client = client or MailgunClient()
        self.sender_name = (
            sender_name or app_settings.notifications.NOTIFICATION_SENDER_NAME
        )

    def subject_for(self, event: Event) -> str:
        return f"[{self.sender_name}] {event.incident.subject}"

    def deliver(self, kind: EventKind, body: str, event: Event) -> DeliveryResult:
        result = self._client.send_message(
            api_key=self.config.api_key,
            sender=self.config.sender,
            recipient=self.config.to,
            subject=self.subject_for(event),
            text=body,
        )

        if not result.is_success:
            logger.error(
                "mail_send_failed",
                to=self.config.to,
                error_code=result.error_code,
                error=result.message,
            )
            raise DeliveryError(
                f"Mailgun delivery failed: {result.message}",
                channel=self.kind.value,
                error_code=result.error_code,
                status_code=result.status_code,
                retry_after=result.retry_after,
            )

        message_id = result.data.get("id") if isinstance(result.data, dict) else None
        logger.info("mail_sent", to=self.config.to, message_id=message_id)
        return DeliveryResult.delivered(
            self.kind,
            f"Mail sent to {self.config.to}",
            external_id=message_id,
            platform_response=result.data,
        )
