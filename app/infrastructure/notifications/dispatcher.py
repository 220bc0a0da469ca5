"""Notification dispatch engine.

Decides, for one (provider, notifier, event) triple, whether a notification
goes out, renders it, delivers it through the provider's channel and
records a ``notified`` audit event on the incident.

Steps:
1. Merge provider and notifier settings (notifier wins)
2. Classify the event from the notifier's point of view
3. Apply the suppression gates (status, or_conditions)
4. Apply the target-event filter
5. Resolve the message body through the template fallback chain
6. Build the channel adapter from the registry
7. Deliver
8. Append the ``notified`` audit event

Suppression and filtering are normal outcomes reported in the
DispatchResult. Configuration, template and delivery errors propagate to
the caller and leave no audit record.

Delivery and audit are not transactional. If the audit append fails after
the message has left, the AuditGuarantee decides whether the caller gets
an AuditWriteError (REQUIRED) or a result with ``audited=False``
(BEST_EFFORT). Neither can recall the message.

Usage Example:
    dispatcher = NotificationDispatcher(
        registry=ChannelRegistry.default(),
        resolver=TemplateResolver(YAMLTemplateRenderer(templates_dir)),
        suppression=SuppressionEvaluator(HolidayCalendar("JP"), clock),
        store=InMemoryIncidentEventStore(),
    )

    result = dispatcher.notify(provider, notifier, event)
    if result.outcome == DispatchOutcome.DELIVERED:
        logger.info("delivered", audit_event_id=result.audit_event.id)
"""

from typing import Any, Dict, Mapping

import structlog

from infrastructure.configuration import AuditGuarantee
from infrastructure.logging import bind_request_context, get_correlation_id
from infrastructure.notifications.classifier import classify_event
from infrastructure.notifications.exceptions import AuditWriteError
from infrastructure.notifications.models import (
    DeliveryResult,
    DispatchOutcome,
    DispatchResult,
    Notifier,
    NotifierProvider,
    merge_settings,
)
from infrastructure.notifications.registry import ChannelRegistry
from infrastructure.notifications.suppression import SuppressionEvaluator
from infrastructure.notifications.templates import TemplateResolver
from infrastructure.persistence import IncidentEventStore
from models.incidents import Event, EventKind

logger = structlog.get_logger()


class NotificationDispatcher:
    """Per-triple notification dispatcher.

    Holds no mutable state between calls; every working value (merged
    settings, contextual kind, rendered body, adapter) is local to one
    ``notify`` call, so the dispatcher can be shared across threads.

    Attributes:
        registry: ChannelRegistry resolving provider kinds to adapters
        resolver: TemplateResolver producing message bodies
        suppression: SuppressionEvaluator applying the skip gates
        store: IncidentEventStore receiving audit events
        audit_guarantee: Behaviour when the audit append fails after delivery
    """

    def __init__(
        self,
        registry: ChannelRegistry,
        resolver: TemplateResolver,
        suppression: SuppressionEvaluator,
        store: IncidentEventStore,
        audit_guarantee: AuditGuarantee = AuditGuarantee.REQUIRED,
    ):
        self.registry = registry
        self.resolver = resolver
        self.suppression = suppression
        self.store = store
        self.audit_guarantee = AuditGuarantee(audit_guarantee)

        logger.info(
            "initialized_notification_dispatcher",
            channels=[kind.value for kind in registry.kinds()],
            audit_guarantee=self.audit_guarantee.value,
        )

    def notify(
        self,
        provider: NotifierProvider,
        notifier: Notifier,
        event: Event,
    ) -> DispatchResult:
        """Dispatch ``event`` to ``notifier`` through ``provider``.

        Args:
            provider: Configured channel instance
            notifier: Subscription of one person to the provider
            event: Incident event to notify about

        Returns:
            DispatchResult describing how the dispatch ended.

        Raises:
            ConfigurationError: Settings are missing or malformed
            NoTemplateError: No template exists for the channel and kind
            TemplateRenderError: A template failed to render
            DeliveryError: The channel transport failed
            UnknownProviderKindError: No adapter is registered for the kind
            AuditWriteError: Audit append failed under REQUIRED guarantee
        """
        with bind_request_context(
            correlation_id=get_correlation_id(),
            provider_kind=provider.kind.value,
            provider_id=provider.id,
            notifier_id=notifier.id,
            event_id=event.id,
            incident_id=event.incident.id,
        ):
            return self._notify(provider, notifier, event)

    def _notify(
        self,
        provider: NotifierProvider,
        notifier: Notifier,
        event: Event,
    ) -> DispatchResult:
        base: Dict[str, Any] = {
            "provider_id": provider.id,
            "notifier_id": notifier.id,
            "event_id": event.id,
        }

        # Audit records are never dispatched themselves.
        if event.kind == EventKind.NOTIFIED:
            logger.debug("notification_ignored_audit_event")
            return DispatchResult(outcome=DispatchOutcome.IGNORED, **base)

        settings = merge_settings(provider, notifier)
        kind = classify_event(event, notifier)
        base["kind"] = kind

        reason = self.suppression.skip_reason(settings, event.incident, kind)
        if reason is not None:
            logger.info(
                "notification_skipped",
                kind=kind.value,
                reason=reason.value,
                incident_status=event.incident.status.value,
            )
            return DispatchResult(outcome=DispatchOutcome.SUPPRESSED, **base)

        adapter_class = self.registry.get(provider.kind)
        target_events = adapter_class.target_events(settings)
        if kind not in target_events:
            logger.info(
                "notification_skipped_due_to_target_events",
                kind=kind.value,
                target_events=sorted(k.value for k in target_events),
            )
            return DispatchResult(outcome=DispatchOutcome.FILTERED, **base)

        body = self.resolver.resolve_body(
            provider.kind, kind, self._render_context(event, notifier, kind)
        )

        adapter = self.registry.create(provider.kind, settings)
        delivery = adapter.deliver(kind, body, event)

        if not delivery.is_delivered:
            logger.info(
                "notification_not_sent",
                kind=kind.value,
                message=delivery.message,
            )
            return DispatchResult(
                outcome=DispatchOutcome.SKIPPED, delivery=delivery, **base
            )

        logger.info(
            "notification_delivered",
            kind=kind.value,
            external_id=delivery.external_id,
        )
        return self._record_audit(provider, notifier, event, kind, delivery, base)

    def _render_context(
        self, event: Event, notifier: Notifier, kind: EventKind
    ) -> Mapping[str, Any]:
        return {
            "event": event,
            "incident": event.incident,
            "notifier": notifier,
            "kind": kind,
        }

    def _record_audit(
        self,
        provider: NotifierProvider,
        notifier: Notifier,
        event: Event,
        kind: EventKind,
        delivery: DeliveryResult,
        base: Dict[str, Any],
    ) -> DispatchResult:
        info = {
            "provider": provider.id,
            "notifier": notifier.id,
            "event": event.id,
            "kind": kind.value,
            "correlation_id": get_correlation_id(),
        }
        try:
            audit_event = self.store.append_event(
                event.incident, EventKind.NOTIFIED, info
            )
        except Exception as e:
            logger.error(
                "audit_record_failed",
                error=str(e),
                error_type=type(e).__name__,
                audit_guarantee=self.audit_guarantee.value,
            )
            if self.audit_guarantee == AuditGuarantee.REQUIRED:
                raise AuditWriteError(
                    f"Delivered but failed to record audit event: {e}",
                    delivery=delivery,
                ) from e
            return DispatchResult(
                outcome=DispatchOutcome.DELIVERED,
                delivery=delivery,
                audited=False,
                **base,
            )

        logger.info("audit_record_appended", audit_event_id=audit_event.id)
        return DispatchResult(
            outcome=DispatchOutcome.DELIVERED,
            delivery=delivery,
            audit_event=audit_event,
            audited=True,
            **base,
        )
