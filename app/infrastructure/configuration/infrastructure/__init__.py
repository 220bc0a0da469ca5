"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.http import HttpSettings

__all__ = [
    "HttpSettings",
]
