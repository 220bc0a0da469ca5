"""Twilio outbound call client."""

from typing import Optional

import requests

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_request_exception,
    classify_response,
)

logger = get_module_logger()

SERVICE = "Twilio"
API_VERSION = "2010-04-01"


class TwilioClient:
    """Places outbound calls through the Twilio REST API.

    Twilio requests ``url`` when the call connects and plays the TwiML it
    returns.

    Attributes:
        base_url: Twilio API base URL
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.twilio.TWILIO_API_URL).rstrip("/")
        self.timeout = timeout or settings.http.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def create_call(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        to_number: str,
        url: str,
    ) -> OperationResult:
        """Create an outbound call.

        Returns:
            OperationResult with the created call resource as data.
        """
        try:
            response = self.session.post(
                f"{self.base_url}/{API_VERSION}/Accounts/{account_sid}/Calls.json",
                auth=(account_sid, auth_token),
                data={"From": from_number, "To": to_number, "Url": url},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("twilio_request_failed", to=to_number, error=str(e))
            return classify_request_exception(e, SERVICE)

        result = classify_response(response, SERVICE)
        logger.info(
            "twilio_response",
            to=to_number,
            status_code=response.status_code,
        )
        return result
