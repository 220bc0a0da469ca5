"""Dispatch-scoped context binding for structured logging.

Everything logged while a single (provider, notifier, event) dispatch runs
carries the same correlation ID and identifiers.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(provider_kind="chat", event_id="evt-1"):
        logger.info("notification_delivered")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind context to all logs emitted within the block.

    Args:
        correlation_id: Unique dispatch identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.
            Keys whose value is None are not bound.

    Values bound by an enclosing block are restored on exit, not dropped.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    context.update({k: v for k, v in extra_context.items() if v is not None})

    with structlog.contextvars.bound_contextvars(**context):
        yield


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")
