"""Test data factories for deterministic test data generation."""

from tests.factories.notifications import (
    CHAT_SETTINGS,
    MAIL_SETTINGS,
    VOICE_CALL_SETTINGS,
    make_event,
    make_incident,
    make_notifier,
    make_provider,
)

__all__ = [
    "CHAT_SETTINGS",
    "MAIL_SETTINGS",
    "VOICE_CALL_SETTINGS",
    "make_event",
    "make_incident",
    "make_notifier",
    "make_provider",
]
