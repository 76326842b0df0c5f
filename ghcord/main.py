"""ghcord entry point: wires the server together and runs it."""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path

import click

from ghcord import __version__
from ghcord.config import Settings, load_settings
from ghcord.utils.logging import get_logger, setup_logging
from ghcord.webhooks.server import WebhookServer
from ghcord.webhooks.signature import sign_payload

log = get_logger(__name__)


async def run(settings: Settings) -> None:
    server = WebhookServer(settings)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    log.info("ghcord_starting", version=__version__)
    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()


@click.group()
@click.version_option(__version__, prog_name="ghcord")
def cli() -> None:
    """Relay GitHub webhooks to a Discord channel."""


@cli.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--bind", default=None, help="Address to listen on")
@click.option("--port", type=int, default=None, help="Port to listen on")
def serve(
    config_path: str | None,
    log_level: str | None,
    bind: str | None,
    port: int | None,
) -> None:
    """Start the webhook server."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if bind:
        settings.server.bind = bind
    if port is not None:
        settings.server.port = port
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings))


@cli.command()
@click.option("--secret", envvar="GHCORD_SECRET", required=True, help="Webhook secret")
@click.argument("payload", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def sign(secret: str, payload: Path) -> None:
    """Print the X-Hub-Signature-256 header value for a payload file."""
    click.echo(sign_payload(secret, payload.read_bytes()))


if __name__ == "__main__":
    cli()
