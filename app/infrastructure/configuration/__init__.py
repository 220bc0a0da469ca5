"""Infrastructure configuration module - public API.

Centralized configuration for the incident notifier using Pydantic
BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    AuditGuarantee: Delivery/audit consistency mode

Example:
    ```python
    from infrastructure.configuration import settings

    sender = settings.notifications.NOTIFICATION_SENDER_NAME
    timeout = settings.http.HTTP_TIMEOUT_SECONDS
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features.notifications import AuditGuarantee

__all__ = ["Settings", "settings", "AuditGuarantee"]
