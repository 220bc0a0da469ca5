"""Incident notification dispatch engine.

Decides whether an incident event is sent to a subscriber, renders it and
delivers it through one of five channels (mail, file, internal_log, chat,
voice_call), then appends a ``notified`` audit event to the incident.

Usage:
    from infrastructure.configuration import settings
    from infrastructure.notifications import (
        NotificationService,
        NotifierProvider,
        Notifier,
    )

    provider = NotifierProvider(
        kind="chat",
        settings={"api_token": "t0k3n", "room": "ops"},
    )
    notifier = Notifier(user="alice", provider_id=provider.id)

    service = NotificationService(settings)
    result = service.notify(provider, notifier, event)
    logger.info("dispatched", outcome=result.outcome.value)
"""

# Exceptions
from infrastructure.notifications.exceptions import (
    NotificationError,
    ConfigurationError,
    NoTemplateError,
    TemplateRenderError,
    DeliveryError,
    UnknownProviderKindError,
    AuditWriteError,
)

# Models
from infrastructure.notifications.models import (
    ProviderKind,
    NotifierProvider,
    Notifier,
    merge_settings,
    DeliveryStatus,
    DeliveryResult,
    DispatchOutcome,
    DispatchResult,
)

# Rules
from infrastructure.notifications.classifier import classify_event
from infrastructure.notifications.calendar import (
    BusinessCalendar,
    HolidayCalendar,
    local_clock,
)
from infrastructure.notifications.suppression import (
    OrCondition,
    SkipReason,
    SuppressionEvaluator,
    TimeRange,
)
from infrastructure.notifications.templates import (
    RenderResult,
    TemplateRenderer,
    TemplateResolver,
    YAMLTemplateRenderer,
)

# Channels
from infrastructure.notifications.channels import (
    ChannelAdapter,
    ChatChannel,
    FileChannel,
    InternalLogChannel,
    MailChannel,
    VoiceCallChannel,
)
from infrastructure.notifications.registry import ChannelRegistry

# Dispatch
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.service import NotificationService

# Export all public interfaces
__all__ = [
    # Exceptions
    "NotificationError",
    "ConfigurationError",
    "NoTemplateError",
    "TemplateRenderError",
    "DeliveryError",
    "UnknownProviderKindError",
    "AuditWriteError",
    # Models
    "ProviderKind",
    "NotifierProvider",
    "Notifier",
    "merge_settings",
    "DeliveryStatus",
    "DeliveryResult",
    "DispatchOutcome",
    "DispatchResult",
    # Rules
    "classify_event",
    "BusinessCalendar",
    "HolidayCalendar",
    "local_clock",
    "OrCondition",
    "SkipReason",
    "SuppressionEvaluator",
    "TimeRange",
    "RenderResult",
    "TemplateRenderer",
    "TemplateResolver",
    "YAMLTemplateRenderer",
    # Channels
    "ChannelAdapter",
    "ChatChannel",
    "FileChannel",
    "InternalLogChannel",
    "MailChannel",
    "VoiceCallChannel",
    "ChannelRegistry",
    # Dispatch
    "NotificationDispatcher",
    "NotificationService",
]
