"""Typed models for outbound chat messages and delivery results."""

from __future__ import annotations

from dataclasses import dataclass

# Platform errors meaning the bot cannot reach the target channel
ACCESS_ERRORS = frozenset({
    "channel_not_found",
    "not_in_channel",
    "is_archived",
    "restricted_action",
})


@dataclass(frozen=True)
class OutgoingMessage:
    target_channel: str
    display_name: str
    icon: str
    color: str
    text: str


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    error: str | None = None

    @property
    def needs_access(self) -> bool:
        return not self.ok and self.error in ACCESS_ERRORS
