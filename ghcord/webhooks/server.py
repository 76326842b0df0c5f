"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import structlog
from aiohttp import web

from ghcord.config import Settings
from ghcord.utils.logging import get_logger
from ghcord.webhooks.formatters import is_supported, route
from ghcord.webhooks.forwarder import DiscordForwarder
from ghcord.webhooks.signature import verify_signature

log = get_logger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"
MAX_LOGGED_BODY = 4096


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


def _message(message: str) -> web.Response:
    return web.json_response({"message": message}, status=200)


class WebhookServer:
    """Receives GitHub webhooks and forwards them to Discord."""

    def __init__(
        self, settings: Settings, forwarder: DiscordForwarder | None = None
    ) -> None:
        self._settings = settings
        self._forwarder = forwarder
        if self._forwarder is None and settings.discord_webhook_url:
            self._forwarder = DiscordForwarder(
                settings.discord_webhook_url, settings.forwarder
            )
        self._runner: web.AppRunner | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if not self._settings.secret:
            log.warning(
                "webhook_no_secret",
                msg="No webhook secret configured; all deliveries will be answered with 500.",
            )
        if not self._settings.discord_webhook_url:
            log.warning(
                "webhook_no_discord_url",
                msg="No Discord webhook URL configured; all deliveries will be answered with 500.",
            )
        app = self.build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        server = self._settings.server
        site = web.TCPSite(self._runner, server.bind, server.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=server.bind,
            port=server.port,
            path=server.path,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        if self._forwarder is not None:
            await self._forwarder.aclose()
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def build_app(self) -> web.Application:
        app = web.Application(client_max_size=self._settings.server.max_body_size)
        path = self._settings.server.path
        if not path.startswith("/"):
            path = f"/{path}"
        app.router.add_post(path, self._handle_webhook)
        app.router.add_get("/health", self._handle_health)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.json_response(
            {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
        )

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        event_type = request.headers.get(EVENT_HEADER)
        delivery = request.headers.get(DELIVERY_HEADER, "")
        with structlog.contextvars.bound_contextvars(
            delivery=delivery, event_type=event_type
        ):
            return await self._process(request, event_type)

    async def _process(self, request: web.Request, event_type: str | None) -> web.Response:
        secret = self._settings.secret
        if not secret:
            log.error("webhook_secret_missing")
            return _error(500, "Missing webhook secret configuration")

        # Verify against the body exactly as received
        try:
            body = await request.read()
        except web.HTTPRequestEntityTooLarge:
            log.warning("webhook_body_too_large", limit=self._settings.server.max_body_size)
            return _error(413, "Payload too large")
        if not verify_signature(secret, body, request.headers.get(SIGNATURE_HEADER)):
            log.warning("webhook_signature_invalid", remote=request.remote)
            return _error(401, "Invalid signature")

        if not event_type:
            return _error(400, f"Missing {EVENT_HEADER} header")

        if not self._settings.discord_webhook_url or self._forwarder is None:
            log.error("webhook_discord_url_missing")
            return _error(500, "Missing Discord webhook URL configuration")

        try:
            payload = json.loads(body)
            log.debug(
                "webhook_payload",
                size=len(body),
                body=body[:MAX_LOGGED_BODY].decode("utf-8", "replace"),
            )

            if not is_supported(event_type):
                log.info("webhook_event_unsupported")
                return _message("Event not supported")

            notification = route(event_type, payload)
            if notification is None:
                return _message("No action taken")

            if self._settings.forwarder.wait_for_delivery:
                await self._forwarder.forward(notification)
            else:
                self._forwarder.dispatch(notification)
        except Exception:
            log.exception("webhook_processing_error")
            return _error(500, "Internal server error")

        log.info("webhook_processed", action=payload.get("action"))
        return _message("Webhook processed successfully")
