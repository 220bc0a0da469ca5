"""Unit tests for provider, notifier and result models."""

import pytest
from pydantic import ValidationError

from infrastructure.notifications.exceptions import UnknownProviderKindError
from infrastructure.notifications.models import (
    DeliveryResult,
    DeliveryStatus,
    Notifier,
    NotifierProvider,
    ProviderKind,
    merge_settings,
)


@pytest.mark.unit
class TestNotifierProvider:
    @pytest.mark.parametrize("kind", ["mail", "file", "internal_log", "chat", "voice_call"])
    def test_known_kinds_accepted(self, kind):
        provider = NotifierProvider(kind=kind)

        assert provider.kind == ProviderKind(kind)
        assert provider.settings == {}

    def test_unknown_kind_fails_at_construction(self):
        with pytest.raises(UnknownProviderKindError) as exc_info:
            NotifierProvider(kind="pager")

        assert exc_info.value.kind == "pager"

    def test_kind_is_immutable(self):
        provider = NotifierProvider(kind="chat")

        with pytest.raises(ValidationError):
            provider.kind = ProviderKind.MAIL

    def test_none_settings_become_empty(self):
        provider = NotifierProvider(kind="file", settings=None)

        assert provider.settings == {}

    def test_ids_generated(self):
        assert NotifierProvider(kind="file").id != NotifierProvider(kind="file").id


@pytest.mark.unit
class TestMergeSettings:
    def test_notifier_wins_on_conflict(self, provider_factory, notifier_factory):
        provider = provider_factory(settings={"room": "ops", "api_token": "t"})
        notifier = notifier_factory(settings={"room": "oncall"})

        merged = merge_settings(provider, notifier)

        assert merged["room"] == "oncall"

    def test_provider_only_keys_preserved(self, provider_factory, notifier_factory):
        provider = provider_factory(settings={"room": "ops", "api_token": "t"})
        notifier = notifier_factory(settings={"notify": True})

        merged = merge_settings(provider, notifier)

        assert merged == {"room": "ops", "api_token": "t", "notify": True}

    def test_merged_settings_are_read_only(self, provider_factory, notifier_factory):
        merged = merge_settings(provider_factory(), notifier_factory())

        with pytest.raises(TypeError):
            merged["room"] = "elsewhere"

    def test_sources_untouched(self, provider_factory, notifier_factory):
        provider = provider_factory(settings={"room": "ops", "api_token": "t"})
        notifier = notifier_factory(settings={"room": "oncall"})

        merge_settings(provider, notifier)

        assert provider.settings["room"] == "ops"
        assert notifier.settings == {"room": "oncall"}


@pytest.mark.unit
def test_notifier_requires_user():
    with pytest.raises(ValidationError):
        Notifier()


@pytest.mark.unit
class TestDeliveryResult:
    def test_delivered(self):
        result = DeliveryResult.delivered(ProviderKind.MAIL, "sent", external_id="m-1")

        assert result.status == DeliveryStatus.DELIVERED
        assert result.is_delivered is True
        assert result.external_id == "m-1"

    def test_skipped(self):
        result = DeliveryResult.skipped(ProviderKind.CHAT, "no color")

        assert result.status == DeliveryStatus.SKIPPED
        assert result.is_delivered is False
