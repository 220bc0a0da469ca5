"""Infrastructure modules for the incident notifier.

Centralized infrastructure components:
- configuration: Settings management (settings, AuditGuarantee)
- logging: Structured logging (get_module_logger, bind_request_context)
- notifications: Notification dispatch engine
- operations: Operation results and HTTP outcome classification
- persistence: Incident event store
"""

# Configuration
from infrastructure.configuration import settings

# Observability
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "settings",
    # Observability
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
