"""Unit tests for ChannelRegistry."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications.channels import (
    ChatChannel,
    FileChannel,
    InternalLogChannel,
    MailChannel,
)
from infrastructure.notifications.exceptions import (
    ConfigurationError,
    UnknownProviderKindError,
)
from infrastructure.notifications.models import ProviderKind
from infrastructure.notifications.registry import ChannelRegistry


@pytest.mark.unit
class TestChannelRegistry:
    def test_default_covers_every_kind(self):
        registry = ChannelRegistry.default()

        assert set(registry.kinds()) == set(ProviderKind)
        assert registry.get(ProviderKind.CHAT) is ChatChannel
        assert registry.get("mail") is MailChannel

    def test_incomplete_registry_fails_validation(self):
        with pytest.raises(UnknownProviderKindError):
            ChannelRegistry.default(adapters=[FileChannel, InternalLogChannel])

    def test_get_unregistered_kind(self):
        registry = ChannelRegistry()
        registry.register(FileChannel)

        with pytest.raises(UnknownProviderKindError):
            registry.get(ProviderKind.CHAT)

    def test_get_unknown_kind_string(self):
        with pytest.raises(UnknownProviderKindError):
            ChannelRegistry.default().get("pager")

    def test_create_passes_dependencies(self):
        client = MagicMock()
        registry = ChannelRegistry.default(
            dependencies={ProviderKind.CHAT: {"client": client, "sender_name": "Bot"}}
        )

        adapter = registry.create(ProviderKind.CHAT, {"api_token": "t", "room": "r"})

        assert isinstance(adapter, ChatChannel)
        assert adapter.sender_name == "Bot"
        assert adapter._client is client

    def test_create_validates_settings(self):
        with pytest.raises(ConfigurationError):
            ChannelRegistry.default().create(ProviderKind.MAIL, {})

    def test_register_replaces_existing(self):
        registry = ChannelRegistry.default()

        class LoudFileChannel(FileChannel):
            pass

        registry.register(LoudFileChannel)

        assert registry.get(ProviderKind.FILE) is LoudFileChannel
