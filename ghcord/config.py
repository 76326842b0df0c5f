"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# GitHub caps webhook payloads at 25 MB
GITHUB_MAX_PAYLOAD = 25 * 1024 * 1024


class ServerConfig(BaseModel):
    bind: str = "0.0.0.0"
    port: int = 8080
    path: str = "/github-webhook"
    max_body_size: int = GITHUB_MAX_PAYLOAD


class ForwarderConfig(BaseModel):
    timeout: float = 10.0
    username: str = ""
    avatar_url: str = ""
    # When false the response is returned before the Discord POST completes
    wait_for_delivery: bool = True


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GHCORD_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    secret: str = ""
    discord_webhook_url: str = ""
    server: ServerConfig = Field(default_factory=ServerConfig)
    forwarder: ForwarderConfig = Field(default_factory=ForwarderConfig)
    log_level: str = "INFO"
    log_json: bool = False


def default_config_path() -> Path:
    """``config.yaml`` under GHCORD_CONFIG_DIR, else the per-user config dir."""
    env = os.environ.get("GHCORD_CONFIG_DIR")
    if env:
        return Path(env) / "config.yaml"
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "ghcord" / "config.yaml"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _env_overrides(settings: Settings) -> dict[str, Any]:
    """Values that came from GHCORD_* environment variables."""
    return settings.model_dump(exclude_unset=True)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("GHCORD_CONFIG")
    if config_path is None:
        default = default_config_path()
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # YAML values as defaults, env vars override
    merged = _deep_merge(yaml_data, _env_overrides(Settings()))
    return Settings.model_validate(merged)
