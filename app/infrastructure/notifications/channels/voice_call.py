"""Voice call channel implementation using Twilio."""

from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

import structlog
from pydantic import BaseModel, ConfigDict, Field

from infrastructure.configuration import settings as app_settings
from infrastructure.configuration.integrations import TwilioSettings
from infrastructure.notifications.channels.base import ChannelAdapter
from infrastructure.notifications.exceptions import DeliveryError
from infrastructure.notifications.models import DeliveryResult, ProviderKind
from integrations.twilio import TwilioClient
from models.incidents import Event, EventKind

logger = structlog.get_logger()

CALLBACK_PATH = "/twilio/incident_events/{event_id}"


class VoiceCallConfig(BaseModel):
    """Settings for placing calls through Twilio."""

    account_sid: str
    auth_token: str
    from_number: str = Field(alias="from")
    to: str

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class VoiceCallChannel(ChannelAdapter):
    """Twilio voice call channel.

    Places a call to ``to``. Twilio fetches the spoken message from a
    callback URL on this deployment that identifies the event; the rendered
    body is only logged here.
    """

    kind = ProviderKind.VOICE_CALL
    config_model = VoiceCallConfig
    DEFAULT_TARGET_EVENTS = frozenset({EventKind.ESCALATED_TO_ME})

    def __init__(
        self,
        settings,
        client: Optional[TwilioClient] = None,
        twilio_settings: Optional[TwilioSettings] = None,
    ):
        super().__init__(settings)
        self._client = client or TwilioClient()
        self.twilio_settings = twilio_settings or app_settings.twilio

    def callback_url(self, event: Event) -> str:
        """Build the TwiML callback URL, embedding basic auth credentials if set."""
        base = urlsplit(self.twilio_settings.TWILIO_CALLBACK_BASE_URL.rstrip("/"))
        netloc = base.netloc
        user = self.twilio_settings.BASIC_AUTH_USER
        if user:
            credentials = quote(user, safe="")
            password = self.twilio_settings.BASIC_AUTH_PASSWORD
            if password:
                credentials = f"{credentials}:{quote(password, safe='')}"
            netloc = f"{credentials}@{netloc}"

        path = base.path + CALLBACK_PATH.format(event_id=quote(str(event.id), safe=""))
        return urlunsplit((base.scheme, netloc, path, "", ""))

    def deliver(self, kind: EventKind, body: str, event: Event) -> DeliveryResult:
        logger.debug("voice_call_body", body=body, event_id=event.id)

        result = self._client.create_call(
            account_sid=self.config.account_sid,
            auth_token=self.config.auth_token,
            from_number=self.config.from_number,
            to_number=self.config.to,
            url=self.callback_url(event),
        )

        if not result.is_success:
            logger.error(
                "voice_call_failed",
                to=self.config.to,
                error_code=result.error_code,
                error=result.message,
            )
            raise DeliveryError(
                f"Twilio call failed: {result.message}",
                channel=self.kind.value,
                error_code=result.error_code,
                status_code=result.status_code,
                retry_after=result.retry_after,
            )

        call_sid = result.data.get("sid") if isinstance(result.data, dict) else None
        logger.info("voice_call_placed", to=self.config.to, call_sid=call_sid)
        return DeliveryResult.delivered(
            self.kind,
            f"Call placed to {self.config.to}",
            external_id=call_sid,
            platform_response=result.data,
        )
