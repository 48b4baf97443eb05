"""Planka Relay entry point — wires everything together and runs the server."""

from __future__ import annotations

import asyncio
import signal
import sys

import click

from planka_relay import __version__
from planka_relay.config import Settings, load_settings
from planka_relay.core.dispatcher import Dispatcher
from planka_relay.transports.base import ChatTransport
from planka_relay.transports.slack_transport import SlackTransport
from planka_relay.utils.logging import get_logger, setup_logging
from planka_relay.webhooks.server import WebhookServer

log = get_logger(__name__)


class Relay:
    """Main application orchestrator."""

    def __init__(
        self,
        settings: Settings,
        dry_run: bool = False,
        transport: ChatTransport | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport or SlackTransport(settings.slack)
        self.dispatcher = Dispatcher(self.transport, settings.slack, dry_run=dry_run)
        self.server = WebhookServer(settings.server, self.dispatcher)

    async def start(self) -> None:
        log.info(
            "relay_starting",
            version=__version__,
            platform=self.transport.platform_name,
            default_channel=self.settings.slack.default_channel,
        )
        await self.transport.start()
        await self.server.start()
        log.info("relay_ready")

    async def stop(self) -> None:
        log.info("relay_stopping")
        await self.server.stop()
        await self.transport.stop()
        log.info("relay_stopped")


async def run(settings: Settings, dry_run: bool = False) -> None:
    app = Relay(settings, dry_run=dry_run)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    await app.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await app.stop()


@click.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--port", type=int, default=None, help="Override the listening port")
@click.option("--dry-run", is_flag=True, help="Log notifications instead of posting them")
@click.version_option(__version__, prog_name="planka-relay")
def cli(config_path: str | None, log_level: str | None, port: int | None, dry_run: bool) -> None:
    """Relay Planka webhooks to Slack channels named in card descriptions."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if port is not None:
        settings.server.port = port
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings, dry_run=dry_run))


if __name__ == "__main__":
    cli()
