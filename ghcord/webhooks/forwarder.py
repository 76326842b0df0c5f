"""Best-effort delivery of notifications to a Discord incoming webhook."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from ghcord.config import ForwarderConfig
from ghcord.utils.logging import get_logger
from ghcord.webhooks.models import Notification


class DiscordForwarder:
    """Posts notifications as Discord embeds.

    Failures are reported to the logger and through the return value of
    :meth:`forward`; nothing is raised and nothing is retried.
    """

    def __init__(
        self,
        webhook_url: str,
        config: ForwarderConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._webhook_url = webhook_url
        self._config = config or ForwarderConfig()
        self._client = client or httpx.AsyncClient(timeout=self._config.timeout)
        self._log = logger or get_logger(__name__)
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def build_body(self, notification: Notification) -> dict[str, Any]:
        body: dict[str, Any] = {"embeds": [notification.to_embed()]}
        if self._config.username:
            body["username"] = self._config.username
        if self._config.avatar_url:
            body["avatar_url"] = self._config.avatar_url
        return body

    async def forward(self, notification: Notification) -> bool:
        """POST one notification. Returns True if Discord accepted it."""
        try:
            resp = await self._client.post(
                self._webhook_url,
                json=self.build_body(notification),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            self._log.error(
                "discord_forward_failed",
                title=notification.title,
                error=str(e) or type(e).__name__,
            )
            return False

        if not resp.is_success:
            self._log.warning(
                "discord_forward_rejected",
                title=notification.title,
                status=resp.status_code,
                body=resp.text[:200],
            )
            return False

        self._log.info("discord_forwarded", title=notification.title, status=resp.status_code)
        return True

    def dispatch(self, notification: Notification) -> asyncio.Task[bool]:
        """Forward in the background; :meth:`aclose` waits for the task."""
        task = asyncio.create_task(self.forward(notification), name="discord-forward")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        await self._client.aclose()
