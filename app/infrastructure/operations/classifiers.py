"""Classify HTTP transport outcomes into OperationResult.

Key Functions:
- classify_response(): requests.Response -> OperationResult
- classify_request_exception(): requests exception -> OperationResult

Usage:
    from infrastructure.operations.classifiers import (
        classify_request_exception,
        classify_response,
    )

    try:
        response = session.post(url, data=payload, timeout=timeout)
    except requests.RequestException as exc:
        return classify_request_exception(exc)
    return classify_response(response, service="Mailgun")
"""

from typing import Any, Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def _response_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _retry_after(response: requests.Response) -> Optional[int]:
    header_value = response.headers.get("Retry-After")
    if not header_value:
        return None
    try:
        return int(header_value)
    except (ValueError, TypeError):
        return None


def classify_response(
    response: requests.Response, service: str = "API"
) -> OperationResult:
    """Classify an HTTP response by status code.

    Status Code Mapping:
    - 2xx: SUCCESS with the parsed body as data
    - 429: TRANSIENT_ERROR with retry_after from the Retry-After header
    - 401/403: UNAUTHORIZED
    - 404: NOT_FOUND
    - 5xx: TRANSIENT_ERROR
    - Other: PERMANENT_ERROR

    Args:
        response: Response returned by requests
        service: Service name used in messages (e.g. "HipChat")

    Returns:
        OperationResult with status, message, error_code and status_code
    """
    status_code = response.status_code
    payload = _response_payload(response)

    if 200 <= status_code < 300:
        return OperationResult.success(
            data=payload,
            message=f"{service} accepted request ({status_code})",
            status_code=status_code,
        )

    error_code = f"HTTP_{status_code}"

    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"{service} rate limited",
            error_code="RATE_LIMITED",
            status_code=status_code,
            retry_after=_retry_after(response),
            data=payload,
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"{service} rejected credentials ({status_code})",
            error_code=error_code,
            status_code=status_code,
            data=payload,
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            f"{service} resource not found",
            error_code=error_code,
            status_code=status_code,
            data=payload,
        )

    if 500 <= status_code < 600:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"{service} server error ({status_code})",
            error_code=error_code,
            status_code=status_code,
            data=payload,
        )

    return OperationResult.error(
        OperationStatus.PERMANENT_ERROR,
        f"{service} error ({status_code})",
        error_code=error_code,
        status_code=status_code,
        data=payload,
    )


def classify_request_exception(
    exc: Exception, service: str = "API"
) -> OperationResult:
    """Classify a network-level exception raised by requests.

    Timeouts and connection failures are transient; anything else raised by
    requests (invalid URL, too many redirects) is permanent.
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"{service} request timed out: {exc}",
            error_code="TIMEOUT",
        )

    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"{service} connection error: {exc}",
            error_code="CONNECTION_ERROR",
        )

    return OperationResult.permanent_error(
        f"{service} request error: {type(exc).__name__}: {exc}",
        error_code="REQUEST_ERROR",
    )
