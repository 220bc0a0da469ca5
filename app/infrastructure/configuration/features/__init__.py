"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.notifications import (
    AuditGuarantee,
    NotificationFeatureSettings,
)

__all__ = [
    "AuditGuarantee",
    "NotificationFeatureSettings",
]
