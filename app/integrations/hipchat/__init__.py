"""HipChat integration for posting room notifications."""

from .client import HipChatClient

__all__ = ["HipChatClient"]
