"""Operation result types and status enums.

Standardized result types for transport calls, including the status enum,
the result dataclass, and classifiers for HTTP responses and exceptions.
"""

from infrastructure.operations.classifiers import (
    classify_request_exception,
    classify_response,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_response",
    "classify_request_exception",
]
