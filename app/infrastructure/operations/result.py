"""Operation result dataclass.

Uniform result returned by the transport clients. Clients never raise for
HTTP or network failures; channel adapters inspect the result and decide.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from transport operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- parsed response payload, when there is one
        error_code: Optional[str] -- machine error code (e.g. HTTP_404)
        status_code: Optional[int] -- HTTP status of the response, if any
        retry_after: Optional[int] -- seconds until retry when rate-limited
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    status_code: Optional[int] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS."""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls,
        data: Optional[Any] = None,
        message: str = "ok",
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data."""
        return cls(
            status=OperationStatus.SUCCESS,
            message=message,
            data=data,
            status_code=status_code,
        )

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code
            status_code: Optional HTTP status of the failed response
            retry_after: Optional seconds until retry (for rate limiting)
            data: Optional response payload for troubleshooting

        Returns:
            OperationResult with specified error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            status_code=status_code,
            retry_after=retry_after,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Create a transient error (timeouts, connection errors, 429, 5xx)."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR,
            message,
            error_code=error_code,
            status_code=status_code,
            retry_after=retry_after,
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a permanent error (bad request, invalid recipient, etc.)."""
        return cls.error(
            OperationStatus.PERMANENT_ERROR,
            message,
            error_code=error_code,
            status_code=status_code,
        )
