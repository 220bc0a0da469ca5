"""Mailgun integration for sending email."""

from .client import MailgunClient, domain_of

__all__ = ["MailgunClient", "domain_of"]
