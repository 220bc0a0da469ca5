"""Shared fixtures for the incident notifier test suite."""

from datetime import date, datetime
from typing import Callable, Iterable, Optional
from unittest.mock import MagicMock

import pytest
import pytz
import structlog

from infrastructure.notifications.calendar import BusinessCalendar
from infrastructure.operations import OperationResult
from infrastructure.persistence import InMemoryIncidentEventStore
from tests.factories.notifications import (
    make_event,
    make_incident,
    make_notifier,
    make_provider,
)

TOKYO = pytz.timezone("Asia/Tokyo")


class FixedCalendar(BusinessCalendar):
    """Calendar with an explicit set of non-business days."""

    def __init__(self, non_business_days: Iterable[date] = ()):
        self.non_business_days = set(non_business_days)

    def is_non_business_day(self, day: date) -> bool:
        return day in self.non_business_days


@pytest.fixture(autouse=True)
def clear_log_context():
    """Keep structlog context vars from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def incident_factory():
    return make_incident


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def provider_factory():
    return make_provider


@pytest.fixture
def notifier_factory():
    return make_notifier


@pytest.fixture
def fixed_clock() -> Callable[..., Callable[[], datetime]]:
    """Factory for clocks frozen at a Tokyo wall-clock time.

    Example:
        clock = fixed_clock(2024, 4, 1, 10, 0)
    """

    def _factory(year=2024, month=4, day=1, hour=10, minute=0):
        moment = TOKYO.localize(datetime(year, month, day, hour, minute))
        return lambda: moment

    return _factory


@pytest.fixture
def calendar_factory():
    """Factory for FixedCalendar instances."""

    def _factory(non_business_days: Optional[Iterable[date]] = None):
        return FixedCalendar(non_business_days or ())

    return _factory


@pytest.fixture
def event_store():
    return InMemoryIncidentEventStore()


@pytest.fixture
def mock_hipchat_client():
    """HipChatClient mock that accepts every message."""
    client = MagicMock()
    client.send_room_message.return_value = OperationResult.success(
        data=None, status_code=204
    )
    return client


@pytest.fixture
def mock_mailgun_client():
    """MailgunClient mock returning a queued message id."""
    client = MagicMock()
    client.send_message.return_value = OperationResult.success(
        data={"id": "<20240401.1@alerts.example.com>", "message": "Queued. Thank you."},
        status_code=200,
    )
    return client


@pytest.fixture
def mock_twilio_client():
    """TwilioClient mock returning a created call."""
    client = MagicMock()
    client.create_call.return_value = OperationResult.success(
        data={"sid": "CA123", "status": "queued"},
        status_code=201,
    )
    return client
