"""Planka Relay chat transports."""

from planka_relay.transports.base import ChatTransport
from planka_relay.transports.slack_transport import SlackTransport

__all__ = [
    "ChatTransport",
    "SlackTransport",
]
