"""Incident notifier configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    HipChatSettings,
    MailgunSettings,
    TwilioSettings,
)

# Feature settings
from infrastructure.configuration.features import NotificationFeatureSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import HttpSettings


class Settings(BaseSettings):
    """Incident notifier configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: Transport endpoints (HipChat, Mailgun, Twilio)
    - **Features**: Notification dispatch behaviour
    - **Infrastructure**: Outbound HTTP behaviour

    Provider and notifier settings (API tokens, rooms, phone numbers) are
    per-subscription data, not process configuration, and never live here.

    Environment Variables:
        PREFIX: Environment prefix; empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.configuration import settings

        tz = settings.notifications.NOTIFICATION_TIMEZONE
        callback = settings.twilio.TWILIO_CALLBACK_BASE_URL

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    hipchat: HipChatSettings
    mailgun: MailgunSettings
    twilio: TwilioSettings

    # Feature settings
    notifications: NotificationFeatureSettings

    # Infrastructure settings
    http: HttpSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "hipchat": HipChatSettings,
            "mailgun": MailgunSettings,
            "twilio": TwilioSettings,
            # Features
            "notifications": NotificationFeatureSettings,
            # Infrastructure
            "http": HttpSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
