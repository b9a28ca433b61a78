"""Configuration for PocketDrop.

Settings come from three layers, lowest precedence first:

  1. defaults declared on :class:`Settings`
  2. ``~/.pocketdrop/config.json`` (optional)
  3. ``POCKETDROP_*`` environment variables

CLI flags are applied on top by ``__main__``.
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "POCKETDROP_"


def get_config_dir() -> Path:
    """Return the per-user config directory (not created here)."""
    return Path.home() / ".pocketdrop"


def get_config_path() -> Path:
    return get_config_dir() / "config.json"


def _default_upload_dir() -> Path:
    return Path.home() / "Downloads" / "PhoneDrop"


class Settings(BaseSettings):
    """PocketDrop settings."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    host: str = Field(default="0.0.0.0", description="Interface to bind the server to")
    port: int = Field(default=3000, description="Preferred port; the next free one is used if busy")
    browse_root: Path = Field(
        default_factory=Path.home,
        description="Directory listed when a client asks for no particular path",
    )
    upload_dir: Path = Field(
        default_factory=_default_upload_dir,
        description="Directory every upload lands in",
    )
    chunk_size: int = Field(default=64 * 1024, gt=0, description="Streaming chunk size in bytes")
    static_dir: Path | None = Field(
        default=None, description="Optional front-end directory served at /"
    )
    show_qr: bool = Field(default=True, description="Print a QR code of the URL at startup")
    log_level: str = Field(default="INFO")

    @field_validator("browse_root", "upload_dir", "static_dir", mode="after")
    @classmethod
    def _expand_user(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        return value.expanduser()

    @classmethod
    def load(cls) -> Settings:
        """Build settings from the config file, letting env vars win."""
        data: dict = {}
        config_path = get_config_path()
        if config_path.exists():
            try:
                data = json.loads(config_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
                data = {}
            if not isinstance(data, dict):
                logger.warning(f"Ignoring config file {config_path}: expected a JSON object")
                data = {}

        # Init kwargs beat env vars in pydantic-settings, so drop overridden keys
        data = {k: v for k, v in data.items() if f"{ENV_PREFIX}{k.upper()}" not in os.environ}
        return cls(**data)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (cached)."""
    return Settings.load()
