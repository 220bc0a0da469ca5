"""Classify an event from a notifier's point of view."""

from infrastructure.notifications.models import Notifier
from models.incidents import Event, EventKind


def classify_event(event: Event, notifier: Notifier) -> EventKind:
    """Return the contextual kind of ``event`` for ``notifier``.

    An escalation to the notifier's own identity becomes ESCALATED_TO_ME;
    every other event keeps its stored kind.
    """
    if event.is_escalated and event.escalated_to == notifier.user:
        return EventKind.ESCALATED_TO_ME
    return event.kind
