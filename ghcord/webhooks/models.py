"""Notification models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any


class Color(IntEnum):
    GREEN = 0x28A745  # success / creation
    RED = 0xD73A49  # failure / deletion
    PURPLE = 0x6F42C1  # merge
    BLUE = 0x0366D6  # neutral
    GRAY = 0x586069  # comment


@dataclass
class EmbedField:
    name: str
    value: str
    inline: bool = True


@dataclass
class Notification:
    title: str
    description: str
    color: Color
    url: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    fields: list[EmbedField] = field(default_factory=list)
    footer: str | None = None

    def to_embed(self) -> dict[str, Any]:
        """Render as a Discord embed object."""
        embed: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "color": int(self.color),
            "url": self.url,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.fields:
            embed["fields"] = [
                {"name": f.name, "value": f.value, "inline": f.inline}
                for f in self.fields
            ]
        if self.footer:
            embed["footer"] = {"text": self.footer}
        return embed
