"""Slack transport using the Web API's chat.postMessage via httpx."""

from __future__ import annotations

from typing import Any

import httpx

from planka_relay.config import SlackConfig
from planka_relay.models import DeliveryResult, OutgoingMessage
from planka_relay.transports.base import ChatTransport
from planka_relay.utils.logging import get_logger

log = get_logger(__name__)


class SlackTransport(ChatTransport):
    def __init__(
        self,
        config: SlackConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._http_transport = http_transport
        self._http_client: httpx.AsyncClient | None = None

    @property
    def platform_name(self) -> str:
        return "slack"

    async def start(self) -> None:
        if not self._config.token:
            log.warning(
                "slack_token_missing",
                msg="No Slack bot token configured; every post will fail with not_authed.",
            )
        self._client()
        log.info("slack_transport_started", api_url=self._config.api_url)

    async def stop(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        log.info("slack_transport_stopped")

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._config.api_url.rstrip("/"),
                headers={"Authorization": f"Bearer {self._config.token}"},
                timeout=self._config.timeout,
                transport=self._http_transport,
            )
        return self._http_client

    # ------------------------------------------------------------------
    # Posting
    # ------------------------------------------------------------------

    def build_payload(self, message: OutgoingMessage) -> dict[str, Any]:
        body: dict[str, Any] = {
            "channel": message.target_channel,
            "username": message.display_name,
            "attachments": [
                {
                    "color": message.color,
                    "text": message.text,
                    "fallback": message.text,
                }
            ],
        }
        if message.icon.startswith(("http://", "https://")):
            body["icon_url"] = message.icon
        elif message.icon:
            body["icon_emoji"] = message.icon
        return body

    async def post_message(self, message: OutgoingMessage) -> DeliveryResult:
        try:
            resp = await self._client().post(
                "/chat.postMessage", json=self.build_payload(message)
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.error(
                "slack_http_error",
                channel=message.target_channel,
                status=e.response.status_code,
            )
            return DeliveryResult(ok=False, error="http_error")
        except httpx.TransportError as e:
            log.error(
                "slack_connection_error",
                channel=message.target_channel,
                error=str(e) or type(e).__name__,
            )
            return DeliveryResult(ok=False, error="connection_error")

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            log.error("slack_invalid_response", channel=message.target_channel)
            return DeliveryResult(ok=False, error="invalid_response")

        if data.get("ok"):
            return DeliveryResult(ok=True)

        error = str(data.get("error") or "unknown_error")
        log.warning("slack_post_rejected", channel=message.target_channel, error=error)
        return DeliveryResult(ok=False, error=error)
