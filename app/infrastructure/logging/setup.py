"""Structlog configuration for the incident notifier.

Console output during development, JSON in production, and silence under
pytest. Every rendered line carries the bound dispatch context and has
channel secrets masked.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("notification_delivered", channel="chat")
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import settings
from infrastructure.logging.formatters import (
    add_app_info,
    add_environment_info,
    mask_sensitive_data,
    truncate_large_values,
)

APP_NAME = "incident-notifier"


def build_processors(prod_mode: bool) -> List[Any]:
    """Return the processor chain, ending in the JSON or console renderer."""
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        add_app_info(APP_NAME, settings.GIT_SHA),
        add_environment_info("production" if prod_mode else settings.PREFIX),
        # Masking runs after the context merge so bound settings are covered.
        mask_sensitive_data(),
        truncate_large_values(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog on top of stdlib logging.

    Args:
        log_level: Overrides settings.LOG_LEVEL.
        is_production: Overrides settings.is_production (JSON vs console).
    """
    if "pytest" in sys.modules:
        # Tests assert on return values and contextvars, never on output.
        structlog.configure(
            processors=[structlog.stdlib.add_log_level, structlog.processors.JSONRenderer()],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
        return structlog.stdlib.get_logger()

    prod_mode = settings.is_production if is_production is None else is_production
    structlog.configure(
        processors=build_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Example:
        # In infrastructure/notifications/registry.py
        logger = get_module_logger()
        # context: {"component": "registry",
        #           "module_path": "infrastructure.notifications.registry"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
