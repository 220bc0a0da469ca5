"""Operation status enumeration.

Outcome classes for transport calls, used to decide how a failed delivery
is reported.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: The remote API accepted the request (2xx)
        TRANSIENT_ERROR: Network failure, timeout, 429 or 5xx
        PERMANENT_ERROR: Any other 4xx, or an unexpected response
        UNAUTHORIZED: Credentials rejected (401/403)
        NOT_FOUND: Room, domain or account not found (404)
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
