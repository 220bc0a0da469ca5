"""Suppression rules deciding whether a notification is sent at all.

Two independent gates; delivery is skipped if either fires:

1. Status gate: once an incident is no longer open, only acknowledged and
   resolved notifications still go out.
2. Condition-set gate: the optional ``or_conditions`` setting is a list of
   conditions. Delivery proceeds if at least one condition matches. A
   condition matches unless one of its checks vetoes it:

   - ``japanese_weekday``: vetoes on holidays and weekends
   - ``not_japanese_weekday``: vetoes on business days
   - ``between: "HH:MM-HH:MM"``: vetoes outside the range
   - ``not_between: "HH:MM-HH:MM"``: vetoes inside the range

Example settings:
    {
        "or_conditions": [
            {"japanese_weekday": True, "not_between": "09:30-18:30"},
            {"not_japanese_weekday": True},
        ]
    }

Ranges are compared as ``start < now < end`` on the time of day and do not
wrap past midnight: "22:00-02:00" contains no time at all.
"""

import re
from datetime import time
from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from infrastructure.logging import get_module_logger
from infrastructure.notifications.calendar import BusinessCalendar, Clock
from infrastructure.notifications.exceptions import ConfigurationError
from models.incidents import EventKind, Incident

logger = get_module_logger()

OR_CONDITIONS_KEY = "or_conditions"

_TIME_RANGE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*-\s*(\d{1,2}):(\d{2})\s*$")


class TimeRange(BaseModel):
    """Same-day time-of-day range with exclusive bounds."""

    start: time
    end: time

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, value: str) -> "TimeRange":
        """Parse "H:MM-HH:MM".

        Raises:
            ValueError: If the string is not a valid range.
        """
        match = _TIME_RANGE.match(value) if isinstance(value, str) else None
        if not match:
            raise ValueError(f"Invalid time range {value!r}, expected HH:MM-HH:MM")
        sh, sm, eh, em = (int(g) for g in match.groups())
        return cls(start=time(sh, sm), end=time(eh, em))

    def contains(self, moment: time) -> bool:
        return self.start < moment < self.end


class OrCondition(BaseModel):
    """One entry of ``or_conditions``. A condition with no checks always matches."""

    japanese_weekday: bool = False
    not_japanese_weekday: bool = False
    between: Optional[TimeRange] = None
    not_between: Optional[TimeRange] = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("between", "not_between", mode="before")
    @classmethod
    def parse_time_range(cls, v: Any) -> Optional[TimeRange]:
        if v is None or isinstance(v, TimeRange):
            return v
        return TimeRange.parse(v)

    def matches(self, non_business_day: bool, now: time) -> bool:
        if self.japanese_weekday and non_business_day:
            return False
        if self.not_japanese_weekday and not non_business_day:
            return False
        if self.between is not None and not self.between.contains(now):
            return False
        if self.not_between is not None and self.not_between.contains(now):
            return False
        return True


def parse_or_conditions(settings: Mapping[str, Any]) -> Optional[List[OrCondition]]:
    """Read ``or_conditions`` from merged settings.

    Returns:
        None when the setting is absent, otherwise the parsed conditions.

    Raises:
        ConfigurationError: If the setting is not a list of valid conditions.
    """
    raw = settings.get(OR_CONDITIONS_KEY)
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(
            f"{OR_CONDITIONS_KEY} must be a list, got {type(raw).__name__}"
        )

    conditions = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            raise ConfigurationError(
                f"{OR_CONDITIONS_KEY}[{index}] must be a mapping, got {type(entry).__name__}"
            )
        try:
            conditions.append(OrCondition.model_validate(dict(entry)))
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid {OR_CONDITIONS_KEY}[{index}]: {e.errors()[0]['msg']}"
            ) from e
    return conditions


class SkipReason(Enum):
    """Why the suppression evaluator vetoed a delivery."""

    INCIDENT_NOT_OPEN = "incident_not_open"
    NO_CONDITION_MATCHED = "no_condition_matched"


class SuppressionEvaluator:
    """Pure rule evaluator over merged settings, incident status and event kind.

    Attributes:
        calendar: BusinessCalendar answering holiday/weekend questions
        clock: Callable returning the current local datetime

    Example:
        evaluator = SuppressionEvaluator(
            calendar=HolidayCalendar("JP"),
            clock=local_clock("Asia/Tokyo"),
        )
        if evaluator.should_skip(settings, incident, EventKind.OPENED):
            ...
    """

    # Kinds that still notify after the incident stops being open.
    CLOSED_INCIDENT_KINDS = frozenset({EventKind.ACKNOWLEDGED, EventKind.RESOLVED})

    def __init__(self, calendar: BusinessCalendar, clock: Clock):
        self.calendar = calendar
        self.clock = clock

    def should_skip(
        self, settings: Mapping[str, Any], incident: Incident, kind: EventKind
    ) -> bool:
        return self.skip_reason(settings, incident, kind) is not None

    def skip_reason(
        self, settings: Mapping[str, Any], incident: Incident, kind: EventKind
    ) -> Optional[SkipReason]:
        """Return the first gate that vetoes delivery, or None to proceed."""
        if self.skip_due_to_status_of_incident(incident, kind):
            return SkipReason.INCIDENT_NOT_OPEN
        if self.skip_due_to_or_conditions(settings):
            return SkipReason.NO_CONDITION_MATCHED
        return None

    def skip_due_to_status_of_incident(self, incident: Incident, kind: EventKind) -> bool:
        return not incident.is_open and kind not in self.CLOSED_INCIDENT_KINDS

    def skip_due_to_or_conditions(self, settings: Mapping[str, Any]) -> bool:
        conditions = parse_or_conditions(settings)
        if not conditions:
            return False

        now = self.clock()
        non_business_day = self.calendar.is_non_business_day(now.date())
        matched = any(c.matches(non_business_day, now.time()) for c in conditions)

        if not matched:
            logger.debug(
                "no_or_condition_matched",
                condition_count=len(conditions),
                non_business_day=non_business_day,
                now=now.isoformat(),
            )
        return not matched
