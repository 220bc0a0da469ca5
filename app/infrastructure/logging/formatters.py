"""Structlog processors used by the logging pipeline.

Usage:
    from infrastructure.logging.formatters import mask_sensitive_data
"""

from typing import Any


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that stamps every entry with app name and version.

    Args:
        app_name: Name of the application.
        app_version: Version string (the deployed git SHA).

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


# Key fragments whose values never reach the log output. Channel settings
# carry api_token (chat), api_key (mail) and auth_token (voice call).
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "auth",
        "credential",
        "private_key",
        "account_sid",
    }
)


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks values of sensitive keys.

    Matching is case-insensitive on a substring of the key, and applies one
    level into dict values so that a logged ``settings`` mapping is masked too.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def _is_sensitive(key: str) -> bool:
        key_lower = key.lower()
        return any(pattern in key_lower for pattern in patterns)

    def _mask(mapping: dict[str, Any]) -> dict[str, Any]:
        masked = {}
        for key, value in mapping.items():
            if _is_sensitive(str(key)) and value is not None:
                masked[key] = mask_value
            else:
                masked[key] = value
        return masked

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked_dict = _mask(event_dict)
        for key, value in masked_dict.items():
            if isinstance(value, dict):
                masked_dict[key] = _mask(value)
        return masked_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates overly large string values.

    Rendered message bodies can be long; this keeps log lines bounded.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor


def add_environment_info(environment: str):
    """Create a processor that adds the environment name to log entries.

    Args:
        environment: Environment name ("production" or the deployment PREFIX).

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["environment"] = environment
        return event_dict

    return processor
