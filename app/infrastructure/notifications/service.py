"""Notification service wiring the dispatch engine from settings.

Provides a class-based interface to the notification system for easier
dependency injection and testing, plus the caller-side fan-out of one event
to many subscriptions.
"""

import contextvars
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

import structlog

from infrastructure.logging import bind_request_context, get_correlation_id
from infrastructure.notifications.calendar import (
    BusinessCalendar,
    Clock,
    HolidayCalendar,
    local_clock,
)
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.models import (
    DispatchOutcome,
    DispatchResult,
    Notifier,
    NotifierProvider,
)
from infrastructure.notifications.registry import ChannelRegistry
from infrastructure.notifications.suppression import SuppressionEvaluator
from infrastructure.notifications.templates import (
    TemplateRenderer,
    TemplateResolver,
    YAMLTemplateRenderer,
)
from infrastructure.persistence import IncidentEventStore, InMemoryIncidentEventStore
from models.incidents import Event

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()

Subscription = Tuple[NotifierProvider, Notifier]


class NotificationService:
    """Class-based notification service.

    Builds a NotificationDispatcher from settings. Every collaborator can be
    replaced, which is how tests pin the clock and calendar.

    Usage:
        from infrastructure.configuration import settings
        from infrastructure.notifications import NotificationService

        service = NotificationService(settings)
        result = service.notify(provider, notifier, event)

        results = service.notify_all(event, [(provider, notifier), ...])
        failed = [r for r in results if r.outcome == DispatchOutcome.FAILED]
    """

    def __init__(
        self,
        settings: "Settings",
        registry: Optional[ChannelRegistry] = None,
        renderer: Optional[TemplateRenderer] = None,
        calendar: Optional[BusinessCalendar] = None,
        clock: Optional[Clock] = None,
        store: Optional[IncidentEventStore] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance.
            registry: Channel registry; defaults to every built-in adapter.
            renderer: Template renderer; defaults to the YAML templates in
                NOTIFICATION_TEMPLATES_DIR.
            calendar: Business calendar; defaults to the holidays of
                NOTIFICATION_HOLIDAY_COUNTRY.
            clock: Wall clock; defaults to NOTIFICATION_TIMEZONE local time.
            store: Incident event store; defaults to an in-memory store.
            dispatcher: Pre-built dispatcher, overriding all of the above.
        """
        self._settings = settings
        feature = settings.notifications

        if dispatcher is None:
            dispatcher = NotificationDispatcher(
                registry=registry or ChannelRegistry.default(),
                resolver=TemplateResolver(
                    renderer
                    or YAMLTemplateRenderer(feature.NOTIFICATION_TEMPLATES_DIR)
                ),
                suppression=SuppressionEvaluator(
                    calendar=calendar
                    or HolidayCalendar(feature.NOTIFICATION_HOLIDAY_COUNTRY),
                    clock=clock or local_clock(feature.NOTIFICATION_TIMEZONE),
                ),
                store=store or InMemoryIncidentEventStore(),
                audit_guarantee=feature.NOTIFICATION_AUDIT_GUARANTEE,
            )

        self._dispatcher = dispatcher
        self.max_workers = feature.NOTIFICATION_MAX_WORKERS

    @property
    def dispatcher(self) -> NotificationDispatcher:
        """Access underlying NotificationDispatcher instance."""
        return self._dispatcher

    def notify(
        self, provider: NotifierProvider, notifier: Notifier, event: Event
    ) -> DispatchResult:
        """Dispatch one event to one subscription. Errors propagate."""
        return self._dispatcher.notify(provider, notifier, event)

    def notify_all(
        self,
        event: Event,
        subscriptions: Sequence[Subscription],
    ) -> List[DispatchResult]:
        """Dispatch ``event`` to every (provider, notifier) pair in parallel.

        Dispatches share no state, so they run on a thread pool of
        NOTIFICATION_MAX_WORKERS threads. An error in one dispatch does not
        affect the others; it is logged and reported as a FAILED result.
        Every dispatch logs under the caller's correlation ID.

        Returns:
            One DispatchResult per subscription, in input order.
        """
        if not subscriptions:
            return []

        with bind_request_context(
            correlation_id=get_correlation_id(),
            event_id=event.id,
            incident_id=event.incident.id,
        ):
            logger.info(
                "dispatching_event",
                kind=event.kind.value,
                subscription_count=len(subscriptions),
            )
            workers = min(self.max_workers, len(subscriptions))
            with ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="notify"
            ) as pool:
                dispatch = self._safe_dispatch(event)
                # Each task runs in its own copy of the caller's logging context.
                futures = [
                    pool.submit(contextvars.copy_context().run, dispatch, subscription)
                    for subscription in subscriptions
                ]
                results = [future.result() for future in futures]

            logger.info(
                "event_dispatched",
                delivered=sum(
                    1 for r in results if r.outcome == DispatchOutcome.DELIVERED
                ),
                failed=sum(1 for r in results if r.outcome == DispatchOutcome.FAILED),
                total=len(results),
            )
        return results

    def _safe_dispatch(self, event: Event) -> Callable[[Subscription], DispatchResult]:
        def dispatch(subscription: Subscription) -> DispatchResult:
            provider, notifier = subscription
            try:
                return self._dispatcher.notify(provider, notifier, event)
            except Exception as e:
                logger.error(
                    "notification_failed",
                    provider_id=provider.id,
                    provider_kind=provider.kind.value,
                    notifier_id=notifier.id,
                    event_id=event.id,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                return DispatchResult(
                    outcome=DispatchOutcome.FAILED,
                    provider_id=provider.id,
                    notifier_id=notifier.id,
                    event_id=event.id,
                    error=str(e),
                    error_type=type(e).__name__,
                )

        return dispatch
