"""Business calendar and wall clock used by suppression rules.

Both are injected into the SuppressionEvaluator so that weekday and time
range rules can be tested against fixed dates and times.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable

import holidays
import pytz

from infrastructure.logging import get_module_logger

logger = get_module_logger()

Clock = Callable[[], datetime]


class BusinessCalendar(ABC):
    """Answers whether a date is a business day."""

    @abstractmethod
    def is_non_business_day(self, day: date) -> bool:
        """True if ``day`` is a public holiday or falls on a weekend."""
        pass


class HolidayCalendar(BusinessCalendar):
    """Calendar backed by the ``holidays`` package for one country.

    Saturdays and Sundays are always non-business days.

    Example:
        calendar = HolidayCalendar("JP")
        calendar.is_non_business_day(date(2024, 1, 1))  # True, New Year's Day
    """

    def __init__(self, country: str = "JP"):
        self.country = country
        self._holidays = holidays.country_holidays(country)
        logger.debug("initialized_holiday_calendar", country=country)

    def is_non_business_day(self, day: date) -> bool:
        return day.weekday() >= 5 or day in self._holidays


def local_clock(timezone_name: str) -> Clock:
    """Build a clock returning the current wall-clock time in ``timezone_name``.

    Raises:
        pytz.UnknownTimeZoneError: If the zone name is not recognized.
    """
    tz = pytz.timezone(timezone_name)

    def now() -> datetime:
        return datetime.now(tz)

    return now
