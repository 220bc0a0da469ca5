"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.hipchat import HipChatSettings
from infrastructure.configuration.integrations.mailgun import MailgunSettings
from infrastructure.configuration.integrations.twilio import TwilioSettings

__all__ = [
    "HipChatSettings",
    "MailgunSettings",
    "TwilioSettings",
]
