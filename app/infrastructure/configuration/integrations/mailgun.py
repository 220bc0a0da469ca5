"""Mailgun integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class MailgunSettings(IntegrationSettings):
    """Mailgun API configuration.

    Environment Variables:
        MAILGUN_API_URL: Mailgun API base URL (EU accounts use api.eu.mailgun.net)
    """

    MAILGUN_API_URL: str = Field(
        default="https://api.mailgun.net", alias="MAILGUN_API_URL"
    )
