"""GitHub webhook intake and Discord delivery."""

from ghcord.webhooks.formatters import is_supported, route
from ghcord.webhooks.forwarder import DiscordForwarder
from ghcord.webhooks.models import Color, EmbedField, Notification
from ghcord.webhooks.server import WebhookServer
from ghcord.webhooks.signature import sign_payload, verify_signature

__all__ = [
    "Color",
    "DiscordForwarder",
    "EmbedField",
    "Notification",
    "WebhookServer",
    "is_supported",
    "route",
    "sign_payload",
    "verify_signature",
]
