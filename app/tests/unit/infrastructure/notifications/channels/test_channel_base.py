"""Unit tests for the ChannelAdapter base behaviour."""

import pytest
from pydantic import BaseModel

from infrastructure.notifications.channels.base import ChannelAdapter
from infrastructure.notifications.exceptions import ConfigurationError
from infrastructure.notifications.models import DeliveryResult, ProviderKind
from models.incidents import EventKind


class PagerConfig(BaseModel):
    pager_id: str
    region: str


class PagerChannel(ChannelAdapter):
    kind = ProviderKind.FILE
    config_model = PagerConfig
    DEFAULT_TARGET_EVENTS = frozenset({EventKind.OPENED})

    def deliver(self, kind, body, event):
        return DeliveryResult.delivered(self.kind, body)


@pytest.mark.unit
class TestTargetEvents:
    def test_defaults_when_events_absent(self):
        assert PagerChannel.target_events({}) == frozenset({EventKind.OPENED})

    def test_explicit_events_replace_defaults(self):
        events = PagerChannel.target_events({"events": ["resolved", "commented"]})

        assert events == frozenset({EventKind.RESOLVED, EventKind.COMMENTED})

    def test_explicit_empty_list_accepts_nothing(self):
        assert PagerChannel.target_events({"events": []}) == frozenset()

    def test_unknown_event_name_rejected(self):
        with pytest.raises(ConfigurationError, match="exploded"):
            PagerChannel.target_events({"events": ["opened", "exploded"]})

    def test_string_rejected(self):
        with pytest.raises(ConfigurationError, match="must be a list"):
            PagerChannel.target_events({"events": "opened"})


@pytest.mark.unit
class TestLoadConfig:
    def test_valid_settings(self):
        adapter = PagerChannel({"pager_id": "p-1", "region": "ap", "extra": 1})

        assert adapter.config.pager_id == "p-1"
        assert adapter.channel_name == "file"

    def test_missing_keys_reported_together(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PagerChannel({})

        assert set(exc_info.value.missing_keys) == {"pager_id", "region"}
        assert exc_info.value.channel == "file"

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError, match="Invalid") as exc_info:
            PagerChannel({"pager_id": ["p"], "region": "ap"})

        assert exc_info.value.missing_keys == ()
