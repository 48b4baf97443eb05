"""Inbound webhook handling."""

from planka_relay.webhooks.auth import extract_token, validate_token
from planka_relay.webhooks.server import WebhookServer

__all__ = [
    "WebhookServer",
    "extract_token",
    "validate_token",
]
