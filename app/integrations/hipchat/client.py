"""HipChat room notification client."""

from typing import Optional
from urllib.parse import quote

import requests

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_request_exception,
    classify_response,
)

logger = get_module_logger()

SERVICE = "HipChat"

# HipChat truncates sender names longer than this.
MAX_FROM_LENGTH = 15


class HipChatClient:
    """Posts colored messages to HipChat rooms.

    Supports both API versions:
    - v1: POST /v1/rooms/message, token as ``auth_token`` query parameter
    - v2: POST /v2/room/<room>/notification, bearer token, JSON body

    Attributes:
        base_url: HipChat API base URL
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.hipchat.HIPCHAT_API_URL).rstrip("/")
        self.timeout = timeout or settings.http.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def send_room_message(
        self,
        api_token: str,
        room: str,
        message: str,
        color: str,
        notify: bool = False,
        from_name: str = "",
        api_version: str = "v2",
    ) -> OperationResult:
        """Send a message to a room.

        Args:
            api_token: Room or user API token
            room: Room ID or name
            message: Plain text message
            color: One of yellow, green, red, purple, gray
            notify: Whether the message triggers a user notification
            from_name: Sender label (v1 only honours up to 15 characters)
            api_version: "v1" or "v2"

        Returns:
            OperationResult; never raises for HTTP or network failures.
        """
        try:
            if api_version == "v1":
                response = self.session.post(
                    f"{self.base_url}/v1/rooms/message",
                    params={"auth_token": api_token, "format": "json"},
                    data={
                        "room_id": room,
                        "from": from_name[:MAX_FROM_LENGTH],
                        "message": message,
                        "message_format": "text",
                        "color": color,
                        "notify": int(notify),
                    },
                    timeout=self.timeout,
                )
            else:
                response = self.session.post(
                    f"{self.base_url}/v2/room/{quote(str(room), safe='')}/notification",
                    headers={"Authorization": f"Bearer {api_token}"},
                    json={
                        "from": from_name,
                        "message": message,
                        "message_format": "text",
                        "color": color,
                        "notify": notify,
                    },
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            logger.error(
                "hipchat_request_failed",
                room=room,
                api_version=api_version,
                error=str(e),
            )
            return classify_request_exception(e, SERVICE)

        result = classify_response(response, SERVICE)
        logger.info(
            "hipchat_response",
            room=room,
            api_version=api_version,
            status_code=response.status_code,
        )
        return result
