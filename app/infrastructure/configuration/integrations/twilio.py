"""Twilio integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class TwilioSettings(IntegrationSettings):
    """Twilio voice call configuration.

    Twilio fetches call instructions (TwiML) from a callback URL that points
    back at this deployment. When the callback endpoint sits behind basic
    auth, the credentials are embedded in the URL handed to Twilio.

    Environment Variables:
        TWILIO_API_URL: Twilio REST API base URL
        TWILIO_CALLBACK_BASE_URL: Public base URL serving the TwiML callback
        BASIC_AUTH_USER: Optional basic auth username for the callback
        BASIC_AUTH_PASSWORD: Optional basic auth password for the callback

    Example:
        ```python
        from infrastructure.configuration import settings

        base_url = settings.twilio.TWILIO_CALLBACK_BASE_URL
        user = settings.twilio.BASIC_AUTH_USER
        ```
    """

    TWILIO_API_URL: str = Field(
        default="https://api.twilio.com", alias="TWILIO_API_URL"
    )
    TWILIO_CALLBACK_BASE_URL: str = Field(
        default="http://localhost:3000", alias="TWILIO_CALLBACK_BASE_URL"
    )
    BASIC_AUTH_USER: str | None = Field(default=None, alias="BASIC_AUTH_USER")
    BASIC_AUTH_PASSWORD: str | None = Field(default=None, alias="BASIC_AUTH_PASSWORD")
