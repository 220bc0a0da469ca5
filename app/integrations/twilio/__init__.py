"""Twilio integration for placing voice calls."""

from .client import TwilioClient

__all__ = ["TwilioClient"]
