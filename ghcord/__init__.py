"""ghcord - relays GitHub webhook deliveries to a Discord channel."""
__version__ = "0.1.0"
