"""Abstract chat transport base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from planka_relay.models import DeliveryResult, OutgoingMessage


class ChatTransport(ABC):
    @property
    @abstractmethod
    def platform_name(self) -> str: ...

    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...

    @abstractmethod
    async def post_message(self, message: OutgoingMessage) -> DeliveryResult:
        """Deliver ``message`` once. Must report failures, not raise them."""
