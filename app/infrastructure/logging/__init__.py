"""Structured logging infrastructure.

Centralized structlog configuration for the incident notifier.

Public API:
    - configure_logging(): Initialize logging for the application
    - build_processors(): The rendering processor chain
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for dispatch-scoped logging
    - get_correlation_id(): Get current correlation ID from context

Example:
    from infrastructure.logging import get_module_logger, bind_request_context

    logger = get_module_logger()

    with bind_request_context(provider_kind="mail"):
        logger.info("notification_delivered")
"""

from infrastructure.logging.setup import (
    build_processors,
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_request_context,
    get_correlation_id,
)

from infrastructure.logging.formatters import (
    add_app_info,
    add_environment_info,
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    # Setup
    "build_processors",
    "configure_logging",
    "get_module_logger",
    # Context
    "bind_request_context",
    "get_correlation_id",
    # Formatters
    "add_app_info",
    "add_environment_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
