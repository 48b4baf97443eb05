"""Shared fixtures: a recording chat transport and Planka payload builders."""

import json

import pytest

from planka_relay.models import DeliveryResult, OutgoingMessage
from planka_relay.transports.base import ChatTransport


class RecordingTransport(ChatTransport):
    """Collects posted messages and answers with queued results."""

    def __init__(self, results=None):
        self.sent: list[OutgoingMessage] = []
        self._results = list(results or [])

    @property
    def platform_name(self) -> str:
        return "test"

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass

    async def post_message(self, message: OutgoingMessage) -> DeliveryResult:
        self.sent.append(message)
        if self._results:
            return self._results.pop(0)
        return DeliveryResult(ok=True)


def _card_body(description="notify &ops @ann", event="cardCreate"):
    return json.dumps({
        "event": event,
        "data": {
            "item": {"name": "Fix login", "description": description},
            "included": {
                "boards": [{"name": "Product"}],
                "lists": [{"name": "Todo"}],
            },
        },
        "user": {"name": "Ann"},
    }).encode()


@pytest.fixture
def recording_transport():
    """Factory: ``recording_transport(results=[...])``."""
    return RecordingTransport


@pytest.fixture
def card_body():
    return _card_body
