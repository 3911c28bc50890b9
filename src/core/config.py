"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets adapters (feed/Telegram HTTP) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "wallcat-relay"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "wallcat-relay"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "wallcat-relay"
    return Path.home() / ".config" / "wallcat-relay"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# wallcat-relay user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated values at the edge (env vars, .env files).
    - A single configuration contract for CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLCAT_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    bot_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WALLCAT_BOT_TOKEN", "BOT_TOKEN", "bot_token"),
        description="Telegram bot token. Plain BOT_TOKEN is accepted too.",
    )
    feed_base_url: str = Field(
        default="https://beta.wall.cat/api/v1",
        min_length=8,
        description="Base URL of the wall.cat API.",
    )
    telegram_base_url: str = Field(
        default="https://api.telegram.org",
        min_length=8,
        description="Base URL of the Telegram Bot API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds), applied to every call.",
    )
    user_agent: str = Field(
        default="wallcat-relay/0.1",
        min_length=1,
        description="User-Agent for outbound requests.",
    )
    crop_width: int = Field(
        default=1000,
        ge=1,
        description="Width bound of the album photos.",
    )
    fetch_concurrency: int = Field(
        default=1,
        ge=1,
        le=32,
        description="Concurrent image fetches while collecting (1 = sequential).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING...).",
    )
