"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from aiohttp import web

from planka_relay import __version__
from planka_relay.config import ServerConfig
from planka_relay.core.dispatcher import Dispatcher
from planka_relay.utils.logging import get_logger
from planka_relay.webhooks.auth import extract_token, validate_token

log = get_logger(__name__)

WEBHOOK_PATHS = ("/", "/webhook", "/apprise")

AVAILABLE_ENDPOINTS = [
    "POST /",
    "POST /webhook",
    "POST /apprise",
    "GET /",
    "GET /health",
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class WebhookServer:
    """Receives Planka webhooks and hands them to the dispatcher."""

    def __init__(self, config: ServerConfig, dispatcher: Dispatcher) -> None:
        self._config = config
        self._dispatcher = dispatcher
        self._runner: web.AppRunner | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if not self._config.auth_token:
            log.warning(
                "webhook_no_auth_configured",
                msg="No auth_token configured; all webhook requests will be rejected.",
            )
        app = self.build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._config.bind, self._config.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._config.bind,
            port=self._config.port,
            endpoints=AVAILABLE_ENDPOINTS,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def build_app(self) -> web.Application:
        app = web.Application()
        for path in WEBHOOK_PATHS:
            app.router.add_post(path, self._handle_webhook)
        app.router.add_get("/", self._handle_info)
        app.router.add_get("/health", self._handle_health)
        app.router.add_route("*", "/{tail:.*}", self._handle_not_found)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        provided = extract_token(request.headers, request.query)
        if not validate_token(provided, self._config.auth_token):
            log.warning("webhook_unauthorized", path=request.path, remote=request.remote)
            return web.json_response({"error": "Unauthorized"}, status=401)

        body = await request.read()
        outcome = await self._dispatcher.relay(body)

        log.info(
            "webhook_received",
            path=request.path,
            planka_event=outcome.details.event or None,
            notified=outcome.sent,
            reason=outcome.reason,
        )

        return web.json_response({
            "status": "success",
            "message": f"Webhook received successfully at {request.path}",
            "notified": outcome.sent,
            "timestamp": _now(),
        })

    async def _handle_info(self, request: web.Request) -> web.Response:
        body: dict[str, Any] = {
            "name": "Planka Webhook Relay",
            "version": __version__,
            "status": "running",
            "endpoints": {
                "root": "POST / - Accepts webhooks (auto-detects format)",
                "webhook": "POST /webhook - Standard webhook endpoint",
                "apprise": "POST /apprise - Apprise format endpoint",
                "health": "GET /health - Health check",
            },
            "timestamp": _now(),
        }
        return web.json_response(body)

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.json_response({
            "status": "healthy",
            "message": "Webhook relay is running",
            "timestamp": _now(),
        })

    async def _handle_not_found(self, request: web.Request) -> web.Response:
        log.warning("webhook_unhandled_request", method=request.method, path=request.path)
        return web.json_response(
            {
                "error": "Not found",
                "message": "This endpoint is not configured",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
            status=404,
        )
