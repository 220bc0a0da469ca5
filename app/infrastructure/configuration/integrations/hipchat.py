"""HipChat integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class HipChatSettings(IntegrationSettings):
    """HipChat API configuration.

    Per-room tokens and room names are provider settings, not process
    configuration. Only the API endpoint lives here.

    Environment Variables:
        HIPCHAT_API_URL: HipChat API base URL

    Example:
        ```python
        from infrastructure.configuration import settings

        api_url = settings.hipchat.HIPCHAT_API_URL
        ```
    """

    HIPCHAT_API_URL: str = Field(
        default="https://api.hipchat.com", alias="HIPCHAT_API_URL"
    )
