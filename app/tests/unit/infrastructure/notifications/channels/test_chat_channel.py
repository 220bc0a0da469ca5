"""Unit tests for ChatChannel (HipChat implementation)."""

import pytest

from infrastructure.notifications.channels.chat import ChatChannel
from infrastructure.notifications.exceptions import ConfigurationError, DeliveryError
from infrastructure.notifications.models import DeliveryStatus
from infrastructure.operations import OperationResult
from models.incidents import EventKind


@pytest.mark.unit
class TestChatChannel:
    @pytest.fixture
    def chat_factory(self, mock_hipchat_client):
        def _factory(**settings):
            merged = {"api_token": "t", "room": "r", **settings}
            return ChatChannel(merged, client=mock_hipchat_client, sender_name="Waker")

        return _factory

    def test_channel_name(self, chat_factory):
        assert chat_factory().channel_name == "chat"

    def test_default_target_events(self):
        assert ChatChannel.default_target_events() == frozenset(
            {
                EventKind.ESCALATED,
                EventKind.OPENED,
                EventKind.ACKNOWLEDGED,
                EventKind.RESOLVED,
            }
        )

    @pytest.mark.parametrize(
        "kind,color",
        [
            (EventKind.OPENED, "red"),
            (EventKind.ACKNOWLEDGED, "yellow"),
            (EventKind.ESCALATED, "yellow"),
            (EventKind.RESOLVED, "green"),
        ],
    )
    def test_posts_with_kind_color(
        self, kind, color, chat_factory, mock_hipchat_client, event_factory
    ):
        result = chat_factory().deliver(kind, "body", event_factory())

        assert result.status == DeliveryStatus.DELIVERED
        mock_hipchat_client.send_room_message.assert_called_once_with(
            api_token="t",
            room="r",
            message="body",
            color=color,
            notify=False,
            from_name="Waker",
            api_version="v2",
        )

    @pytest.mark.parametrize(
        "kind", [EventKind.COMMENTED, EventKind.ESCALATED_TO_ME]
    )
    def test_colorless_kind_skipped_without_network_call(
        self, kind, chat_factory, mock_hipchat_client, event_factory
    ):
        result = chat_factory().deliver(kind, "body", event_factory())

        assert result.status == DeliveryStatus.SKIPPED
        mock_hipchat_client.send_room_message.assert_not_called()

    @pytest.mark.parametrize(
        "value,expected",
        [("1", "v1"), ("v1", "v1"), (1, "v1"), ("V1", "v1"), ("2", "v2"), ("v2", "v2"), (None, "v2")],
    )
    def test_api_version_normalized(self, value, expected, chat_factory):
        assert chat_factory(api_version=value).config.api_version == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), ("true", True), ("1", True), (1, True), ("false", False), (0, False), (None, False)],
    )
    def test_notify_coerced_to_bool(self, value, expected, chat_factory):
        assert chat_factory(notify=value).config.notify is expected

    def test_integer_room_accepted(self, chat_factory):
        assert chat_factory(room=12345).config.room == "12345"

    def test_missing_settings(self, mock_hipchat_client):
        with pytest.raises(ConfigurationError) as exc_info:
            ChatChannel({"room": "r"}, client=mock_hipchat_client)

        assert exc_info.value.missing_keys == ("api_token",)

    def test_transport_failure_raises_delivery_error(
        self, chat_factory, mock_hipchat_client, event_factory
    ):
        mock_hipchat_client.send_room_message.return_value = (
            OperationResult.permanent_error(
                "HipChat error (400)", error_code="HTTP_400", status_code=400
            )
        )

        with pytest.raises(DeliveryError) as exc_info:
            chat_factory().deliver(EventKind.OPENED, "body", event_factory())

        assert exc_info.value.channel == "chat"
        assert exc_info.value.error_code == "HTTP_400"
        assert exc_info.value.status_code == 400

    def test_rate_limit_carries_retry_after(
        self, chat_factory, mock_hipchat_client, event_factory
    ):
        mock_hipchat_client.send_room_message.return_value = (
            OperationResult.transient_error(
                "HipChat rate limited (429)",
                error_code="HTTP_429",
                status_code=429,
                retry_after=30,
            )
        )

        with pytest.raises(DeliveryError) as exc_info:
            chat_factory().deliver(EventKind.OPENED, "body", event_factory())

        assert exc_info.value.retry_after == 30
