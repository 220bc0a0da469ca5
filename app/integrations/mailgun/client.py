"""Mailgun messages API client."""

from email.utils import parseaddr
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

SERVICE = "Mailgun"


def domain_of(address: str) -> str:
    """Return the domain part of an email address.

    Accepts bare addresses and display-name forms:
    "Waker <ops@example.com>" -> "example.com".
    """
    _, addr = parseaddr(address)
    return (addr or address).rsplit("@", 1)[-1]


class MailgunClient:
    """Sends plain-text email through the Mailgun messages API.

    The sending domain is the domain of the ``from`` address.

    Attributes:
        base_url: Mailgun API base URL
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.mailgun.MAILGUN_API_URL).rstrip("/")
        self.timeout = timeout or settings.http.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def send_message(
        self,
        api_key: str,
        sender: str,
        recipient: str,
        subject: str,
        text: str,
    ) -> OperationResult:
        """Send an email.

        Args:
            api_key: Mailgun API key (basic auth password, user "api")
            sender: From address; its domain selects the Mailgun domain
            recipient: To address
            subject: Subject line
            text: Plain text body

        Returns:
            OperationResult with the Mailgun response body as data.
        """
        domain = domain_of(sender)
        try:
            response = self.session.post(
                f"{self.base_url}/v3/{domain}/messages",
                auth=("api", api_key),
                data={
                    "from": sender,
                    "to": recipient,
                    "subject": subject,
                    "text": text,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("mailgun_request_failed", domain=domain, error=str(e))
            return classify_request_exception(e, SERVICE)

        result = classify_response(response, SERVICE)
        logger.info(
            "mailgun_response",
            domain=domain,
            status_code=response.status_code,
            body=result.data,
        )
        return result
