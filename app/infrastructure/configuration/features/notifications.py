"""Notification dispatch feature settings."""

from enum import Enum
from pathlib import Path

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings

DEFAULT_TEMPLATES_DIR = (
    Path(__file__).resolve().parents[2] / "notifications" / "templates"
)


class AuditGuarantee(str, Enum):
    """What happens when the audit record cannot be written after delivery.

    REQUIRED: raise AuditWriteError (carrying the delivery result).
    BEST_EFFORT: log the failure and report ``audited=False``.

    Neither mode can recall a message that was already delivered.
    """

    REQUIRED = "required"
    BEST_EFFORT = "best_effort"


class NotificationFeatureSettings(FeatureSettings):
    """Notification dispatch configuration.

    Environment Variables:
        NOTIFICATION_TIMEZONE: Wall-clock zone for between/not_between rules
        NOTIFICATION_HOLIDAY_COUNTRY: Holiday calendar used for weekday rules
        NOTIFICATION_TEMPLATES_DIR: Directory holding <channel>.yml templates
        NOTIFICATION_SENDER_NAME: Sender label for chat and mail subjects
        NOTIFICATION_AUDIT_GUARANTEE: required | best_effort
        NOTIFICATION_MAX_WORKERS: Thread pool size for notify_all fan-out

    Example:
        ```python
        from infrastructure.configuration import settings

        tz = settings.notifications.NOTIFICATION_TIMEZONE
        guarantee = settings.notifications.NOTIFICATION_AUDIT_GUARANTEE
        ```
    """

    NOTIFICATION_TIMEZONE: str = Field(
        default="Asia/Tokyo", alias="NOTIFICATION_TIMEZONE"
    )
    NOTIFICATION_HOLIDAY_COUNTRY: str = Field(
        default="JP", alias="NOTIFICATION_HOLIDAY_COUNTRY"
    )
    NOTIFICATION_TEMPLATES_DIR: Path = Field(
        default=DEFAULT_TEMPLATES_DIR, alias="NOTIFICATION_TEMPLATES_DIR"
    )
    NOTIFICATION_SENDER_NAME: str = Field(
        default="Waker", alias="NOTIFICATION_SENDER_NAME"
    )
    NOTIFICATION_AUDIT_GUARANTEE: AuditGuarantee = Field(
        default=AuditGuarantee.REQUIRED, alias="NOTIFICATION_AUDIT_GUARANTEE"
    )
    NOTIFICATION_MAX_WORKERS: int = Field(
        default=4, ge=1, alias="NOTIFICATION_MAX_WORKERS"
    )
