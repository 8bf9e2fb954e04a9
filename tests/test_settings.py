"""Unit tests for aeon_dashboard.config.settings."""

from __future__ import annotations

import json

import pytest

from aeon_dashboard.config.settings import AppSettings, load_config


class TestDatabaseUrl:
    """Tests for the asyncpg URL rewrite."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (
                "postgres://u:p@host/db",
                "postgresql+asyncpg://u:p@host/db",
            ),
            (
                "postgresql://u:p@host/db?sslmode=require",
                "postgresql+asyncpg://u:p@host/db?ssl=require",
            ),
            (
                "postgresql://u:p@host/db?sslmode=require&channel_binding=require",
                "postgresql+asyncpg://u:p@host/db?ssl=require",
            ),
            (
                "postgresql://u:p@host/db?channel_binding=require&sslmode=require",
                "postgresql+asyncpg://u:p@host/db?ssl=require",
            ),
            (
                "postgresql+asyncpg://u:p@host/db",
                "postgresql+asyncpg://u:p@host/db",
            ),
        ],
    )
    def test_rewrite(self, raw: str, expected: str) -> None:
        assert AppSettings(database_url=raw).database_url == expected


class TestAliases:
    """Tests for environment variable aliases."""

    def test_neon_url_and_backend_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setenv("NEON_DATABASE_URL", "postgres://u:p@neon/db")
        monkeypatch.setenv("BACKEND_PORT", "8080")

        settings = AppSettings()

        assert settings.database_url == "postgresql+asyncpg://u:p@neon/db"
        assert settings.port == 8080

    def test_guild_id_is_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DEFAULT_GUILD_ID", raising=False)
        monkeypatch.setenv("DISCORD_GUILD_ID", "111122223333444455")
        assert AppSettings().default_guild_id == "111122223333444455"

    def test_empty_guild_id(self) -> None:
        assert AppSettings(default_guild_id="").default_guild_id is None


class TestLoadConfig:
    """Tests for JSON config loading."""

    def test_missing_file(self, tmp_path) -> None:
        settings = load_config(tmp_path / "nope.json")
        assert isinstance(settings, AppSettings)

    def test_file_overrides(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"port": 6000, "cors_origins": ["https://dash.example"]}))

        settings = load_config(path)

        assert settings.port == 6000
        assert settings.cors_origins == ["https://dash.example"]
