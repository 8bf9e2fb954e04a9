"""Configuration management using pydantic-settings.

Provides validated configuration with support for:
- Environment variables (DATABASE_URL, PORT, DEFAULT_GUILD_ID, ...)
- A .env file in the working directory
- An optional JSON config file (config.json)
"""

from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings with validation.

    Settings are read from the environment first; values passed explicitly
    (for example from a JSON config file) override them.
    """

    database_url: str = Field(
        default="",
        validation_alias=AliasChoices("database_url", "DATABASE_URL", "NEON_DATABASE_URL"),
    )
    host: str = "0.0.0.0"
    port: int = Field(
        default=5000,
        validation_alias=AliasChoices("port", "PORT", "BACKEND_PORT"),
    )
    default_guild_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "default_guild_id", "DEFAULT_GUILD_ID", "DISCORD_GUILD_ID"
        ),
    )
    cors_origins: list[str] = ["*"]
    pool_size: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("database_url", mode="after")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        """Rewrite plain Postgres URLs (as handed out by Neon) for asyncpg."""
        if not v:
            return v
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                v = "postgresql+asyncpg://" + v[len(prefix) :]
                break
        # asyncpg takes ssl=, not libpq's sslmode=, and has no channel_binding
        v = v.replace("sslmode=", "ssl=")
        v = re.sub(r"[?&]channel_binding=[^&]*", "", v)
        if "?" not in v and "&" in v:
            v = v.replace("&", "?", 1)
        return v

    @field_validator("default_guild_id", mode="before")
    @classmethod
    def stringify_guild_id(cls, v: Any) -> str | None:
        """Guild ids are snowflakes; keep them as strings."""
        if v is None or v == "":
            return None
        return str(v).strip()

    @classmethod
    def from_json(cls, path: str | Path = "config.json") -> "AppSettings":
        """Load settings from a JSON config file.

        Args:
            path: Path to the JSON config file

        Returns:
            AppSettings instance; environment-only settings if the file
            does not exist
        """
        config_path = Path(path)
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls(**data)
        return cls()


@lru_cache
def get_settings(config_path: str = "config.json") -> AppSettings:
    """Get cached application settings.

    Args:
        config_path: Path to JSON config file (default: config.json)

    Returns:
        Cached AppSettings instance
    """
    return AppSettings.from_json(config_path)


def load_config(path: str | Path = "config.json") -> AppSettings:
    """Load configuration from file, bypassing the cache."""
    get_settings.cache_clear()
    return AppSettings.from_json(path)
