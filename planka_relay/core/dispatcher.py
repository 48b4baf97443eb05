"""Decide whether an event is worth a chat message, and deliver it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from planka_relay.config import SlackConfig
from planka_relay.core.details import EventDetails, extract_details
from planka_relay.core.events import NOTIFY_EVENTS
from planka_relay.core.formatter import format_message
from planka_relay.core.targets import is_channel_target
from planka_relay.models import DeliveryResult, OutgoingMessage
from planka_relay.transports.base import ChatTransport
from planka_relay.utils.logging import get_logger

log = get_logger(__name__)

ACCESS_NOTICE_COLOR = "#daa038"


def should_notify(event: str, details: EventDetails) -> bool:
    return event in NOTIFY_EVENTS and bool(details.notification_targets)


def pick_target(targets: Iterable[str]) -> str | None:
    """First channel-shaped target, or None when only users were named."""
    for target in targets:
        if is_channel_target(target):
            return target
    return None


def to_channel_name(target: str) -> str:
    """``&ops`` and ``#ops`` both address the ``#ops`` channel."""
    if is_channel_target(target):
        return "#" + target[1:]
    return target


@dataclass(frozen=True)
class RelayOutcome:
    details: EventDetails
    sent: bool
    reason: str
    target: str | None = None
    delivery: DeliveryResult | None = None


class Dispatcher:
    """Runs one webhook body through extraction, formatting and delivery."""

    def __init__(
        self,
        transport: ChatTransport,
        config: SlackConfig,
        dry_run: bool = False,
    ) -> None:
        self._transport = transport
        self._config = config
        self._dry_run = dry_run

    async def relay(self, body: bytes) -> RelayOutcome:
        details = extract_details(body)
        event = details.event

        log.info(
            "webhook_details",
            planka_event=event or None,
            card=details.card_title,
            board=details.board_name,
            list=details.list_name,
            user=details.username,
            targets=list(details.notification_targets),
        )

        if event not in NOTIFY_EVENTS:
            return RelayOutcome(details=details, sent=False, reason="not_allowed")
        if not should_notify(event, details):
            return RelayOutcome(details=details, sent=False, reason="no_targets")

        picked = pick_target(details.notification_targets)
        channel = to_channel_name(picked) if picked else self._config.default_channel
        formatted = format_message(event, details)
        message = OutgoingMessage(
            target_channel=channel,
            display_name=self._config.display_name,
            icon=self._config.icon,
            color=formatted.color,
            text=formatted.text,
        )

        if self._dry_run:
            log.info("notification_dry_run", channel=channel, text=message.text)
            return RelayOutcome(details=details, sent=False, reason="dry_run", target=channel)

        result = await self._transport.post_message(message)
        if result.ok:
            log.info("notification_sent", channel=channel, planka_event=event)
            return RelayOutcome(
                details=details, sent=True, reason="sent", target=channel, delivery=result
            )

        log.error("notification_failed", channel=channel, planka_event=event, error=result.error)
        if result.needs_access:
            await self._send_access_notice(channel, details, result)
        return RelayOutcome(
            details=details,
            sent=False,
            reason="delivery_failed",
            target=channel,
            delivery=result,
        )

    async def _send_access_notice(
        self, channel: str, details: EventDetails, result: DeliveryResult
    ) -> None:
        log_channel = self._config.log_channel
        if not log_channel or log_channel == channel:
            return

        text = (
            f"⚠️ Could not post to {channel} ({result.error}) for card "
            f"*{details.card_title}*. Invite the bot to {channel} or check the channel name."
        )
        notice = OutgoingMessage(
            target_channel=log_channel,
            display_name=self._config.display_name,
            icon=self._config.icon,
            color=ACCESS_NOTICE_COLOR,
            text=text,
        )
        notice_result = await self._transport.post_message(notice)
        if notice_result.ok:
            log.info("access_notice_sent", channel=channel, log_channel=log_channel)
        else:
            log.error(
                "access_notice_failed",
                log_channel=log_channel,
                error=notice_result.error,
            )
