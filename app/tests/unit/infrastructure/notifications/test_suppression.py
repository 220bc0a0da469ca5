"""Unit tests for suppression rules.

Tests cover:
- Time range parsing and exclusive bounds
- Individual or_conditions checks
- OR-of-ANDs evaluation across conditions
- Incident status gate
- Malformed or_conditions settings
"""

from datetime import date, time

import pytest

from infrastructure.notifications.exceptions import ConfigurationError
from infrastructure.notifications.suppression import (
    OrCondition,
    SkipReason,
    SuppressionEvaluator,
    TimeRange,
    parse_or_conditions,
)
from models.incidents import EventKind, IncidentStatus

# 2024-04-01 is a Monday.
MONDAY = date(2024, 4, 1)


@pytest.fixture
def evaluator_factory(calendar_factory, fixed_clock):
    """Build an evaluator frozen at the given Tokyo time on 2024-04-01."""

    def _factory(hour=10, minute=0, holiday=False):
        calendar = calendar_factory([MONDAY] if holiday else [])
        return SuppressionEvaluator(
            calendar=calendar, clock=fixed_clock(2024, 4, 1, hour, minute)
        )

    return _factory


@pytest.mark.unit
class TestTimeRange:
    def test_parse(self):
        time_range = TimeRange.parse("9:30-18:30")

        assert time_range.start == time(9, 30)
        assert time_range.end == time(18, 30)

    @pytest.mark.parametrize("value", ["9:30", "09:30-", "a-b", "25:00-26:00", 930])
    def test_parse_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            TimeRange.parse(value)

    def test_bounds_are_exclusive(self):
        time_range = TimeRange.parse("09:30-18:30")

        assert time_range.contains(time(9, 30)) is False
        assert time_range.contains(time(9, 31)) is True
        assert time_range.contains(time(18, 30)) is False

    def test_midnight_spanning_range_contains_nothing(self):
        time_range = TimeRange.parse("22:00-02:00")

        assert time_range.contains(time(23, 0)) is False
        assert time_range.contains(time(1, 0)) is False


@pytest.mark.unit
class TestOrCondition:
    def test_empty_condition_always_matches(self):
        assert OrCondition().matches(True, time(3, 0)) is True

    def test_japanese_weekday(self):
        condition = OrCondition(japanese_weekday=True)

        assert condition.matches(False, time(10, 0)) is True
        assert condition.matches(True, time(10, 0)) is False

    def test_not_japanese_weekday(self):
        condition = OrCondition(not_japanese_weekday=True)

        assert condition.matches(True, time(10, 0)) is True
        assert condition.matches(False, time(10, 0)) is False

    def test_between(self):
        condition = OrCondition(between="09:30-18:30")

        assert condition.matches(False, time(10, 0)) is True
        assert condition.matches(False, time(20, 0)) is False

    def test_not_between(self):
        condition = OrCondition(not_between="09:30-18:30")

        assert condition.matches(False, time(10, 0)) is False
        assert condition.matches(False, time(20, 0)) is True

    def test_checks_combine_with_and(self):
        condition = OrCondition(japanese_weekday=True, not_between="09:30-18:30")

        assert condition.matches(False, time(20, 0)) is True
        assert condition.matches(True, time(20, 0)) is False
        assert condition.matches(False, time(10, 0)) is False

    def test_unknown_keys_ignored(self):
        condition = OrCondition.model_validate({"full_moon": True})

        assert condition.matches(False, time(10, 0)) is True


@pytest.mark.unit
class TestParseOrConditions:
    def test_absent(self):
        assert parse_or_conditions({}) is None

    def test_parses_list(self):
        conditions = parse_or_conditions(
            {"or_conditions": [{"between": "09:00-10:00"}, {}]}
        )

        assert len(conditions) == 2
        assert conditions[0].between == TimeRange.parse("09:00-10:00")

    def test_not_a_list(self):
        with pytest.raises(ConfigurationError, match="must be a list"):
            parse_or_conditions({"or_conditions": {"between": "09:00-10:00"}})

    def test_entry_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match=r"or_conditions\[0\]"):
            parse_or_conditions({"or_conditions": ["japanese_weekday"]})

    def test_bad_time_range(self):
        with pytest.raises(ConfigurationError, match=r"or_conditions\[1\]"):
            parse_or_conditions(
                {"or_conditions": [{}, {"between": "nine-to-five"}]}
            )


@pytest.mark.unit
class TestStatusGate:
    @pytest.mark.parametrize(
        "kind",
        [
            EventKind.OPENED,
            EventKind.ESCALATED,
            EventKind.ESCALATED_TO_ME,
            EventKind.COMMENTED,
        ],
    )
    @pytest.mark.parametrize(
        "status", [IncidentStatus.ACKNOWLEDGED, IncidentStatus.RESOLVED]
    )
    def test_closed_incident_skips_other_kinds(
        self, kind, status, evaluator_factory, incident_factory
    ):
        evaluator = evaluator_factory()
        incident = incident_factory(status=status)
        # A matching condition cannot rescue a status skip.
        settings = {"or_conditions": [{}]}

        assert evaluator.should_skip(settings, incident, kind) is True
        assert evaluator.skip_reason(settings, incident, kind) == SkipReason.INCIDENT_NOT_OPEN

    @pytest.mark.parametrize("kind", [EventKind.ACKNOWLEDGED, EventKind.RESOLVED])
    def test_closed_incident_still_sends_closing_kinds(
        self, kind, evaluator_factory, incident_factory
    ):
        incident = incident_factory(status=IncidentStatus.RESOLVED)

        assert evaluator_factory().should_skip({}, incident, kind) is False

    def test_open_incident_sends_everything(self, evaluator_factory, incident_factory):
        incident = incident_factory()

        assert evaluator_factory().should_skip({}, incident, EventKind.OPENED) is False


@pytest.mark.unit
class TestConditionSetGate:
    def test_absent_conditions_never_skip(self, evaluator_factory, incident_factory):
        assert evaluator_factory().should_skip({}, incident_factory(), EventKind.OPENED) is False

    def test_empty_conditions_never_skip(self, evaluator_factory, incident_factory):
        settings = {"or_conditions": []}

        assert evaluator_factory().should_skip(settings, incident_factory(), EventKind.OPENED) is False

    def test_not_between_during_range_skips(self, evaluator_factory, incident_factory):
        settings = {"or_conditions": [{"not_between": "09:30-18:30"}]}
        evaluator = evaluator_factory(hour=10)

        assert evaluator.should_skip(settings, incident_factory(), EventKind.OPENED) is True
        assert (
            evaluator.skip_reason(settings, incident_factory(), EventKind.OPENED)
            == SkipReason.NO_CONDITION_MATCHED
        )

    def test_not_between_outside_range_sends(self, evaluator_factory, incident_factory):
        settings = {"or_conditions": [{"not_between": "09:30-18:30"}]}

        assert (
            evaluator_factory(hour=20).should_skip(settings, incident_factory(), EventKind.OPENED)
            is False
        )

    def test_any_matching_condition_is_enough(self, evaluator_factory, incident_factory):
        # Business hours on a business day: first vetoed, second matches.
        settings = {
            "or_conditions": [
                {"japanese_weekday": True, "not_between": "09:30-18:30"},
                {"between": "09:00-11:00"},
            ]
        }

        assert evaluator_factory(hour=10).should_skip(settings, incident_factory(), EventKind.OPENED) is False

    def test_holiday_rules(self, evaluator_factory, incident_factory):
        settings = {
            "or_conditions": [
                {"japanese_weekday": True, "not_between": "09:30-18:30"},
                {"not_japanese_weekday": True},
            ]
        }

        # Holiday at 10:00: second condition matches.
        assert evaluator_factory(hour=10, holiday=True).should_skip(
            settings, incident_factory(), EventKind.OPENED
        ) is False
        # Business day at 10:00: both vetoed.
        assert evaluator_factory(hour=10).should_skip(
            settings, incident_factory(), EventKind.OPENED
        ) is True
        # Business day at 20:00: first condition matches.
        assert evaluator_factory(hour=20).should_skip(
            settings, incident_factory(), EventKind.OPENED
        ) is False

    def test_malformed_conditions_raise(self, evaluator_factory, incident_factory):
        settings = {"or_conditions": "japanese_weekday"}

        with pytest.raises(ConfigurationError):
            evaluator_factory().should_skip(settings, incident_factory(), EventKind.OPENED)
