"""Unit tests for aeon_dashboard.core.guilds."""

from __future__ import annotations

import pytest

from aeon_dashboard.core.guilds import (
    FALLBACK_GUILD_ID,
    PLACEHOLDER_SENTINEL,
    GuildResolver,
    is_placeholder,
    normalize_guild_id,
)

REAL_GUILD = "111122223333444455"
DETECTED_GUILD = "555566667777888899"


# ---------------------------------------------------------------------------
# is_placeholder / normalize_guild_id
# ---------------------------------------------------------------------------


class TestPlaceholders:
    """Tests for placeholder detection and request-boundary normalisation."""

    @pytest.mark.parametrize(
        "value",
        [None, "", PLACEHOLDER_SENTINEL, f"  {PLACEHOLDER_SENTINEL}_2 "],
    )
    def test_placeholder_values(self, value) -> None:
        assert is_placeholder(value)

    def test_real_id_is_not_placeholder(self) -> None:
        assert not is_placeholder(REAL_GUILD)

    def test_normalize_stringifies_numbers(self) -> None:
        assert normalize_guild_id(111122223333444455) == REAL_GUILD

    def test_normalize_strips_whitespace(self) -> None:
        assert normalize_guild_id(f" {REAL_GUILD} ") == REAL_GUILD

    def test_normalize_placeholder_is_none(self) -> None:
        assert normalize_guild_id(PLACEHOLDER_SENTINEL) is None
        assert normalize_guild_id("   ") is None
        assert normalize_guild_id(None) is None


# ---------------------------------------------------------------------------
# GuildResolver.resolve
# ---------------------------------------------------------------------------


class TestGuildResolver:
    """Tests for GuildResolver.resolve."""

    def test_real_request_wins(self) -> None:
        resolver = GuildResolver(default_guild_id="1", auto_detected=DETECTED_GUILD)
        assert resolver.resolve(REAL_GUILD) == REAL_GUILD

    def test_auto_detected_used_when_nothing_requested(self) -> None:
        resolver = GuildResolver(auto_detected=DETECTED_GUILD)
        assert resolver.resolve(None) == DETECTED_GUILD

    @pytest.mark.parametrize(
        "requested", [None, "", PLACEHOLDER_SENTINEL, FALLBACK_GUILD_ID]
    )
    def test_never_returns_placeholder_or_fallback_when_detected(self, requested) -> None:
        resolver = GuildResolver(
            default_guild_id=PLACEHOLDER_SENTINEL, auto_detected=DETECTED_GUILD
        )
        resolved = resolver.resolve(requested)
        assert resolved == DETECTED_GUILD
        assert resolved != FALLBACK_GUILD_ID
        assert PLACEHOLDER_SENTINEL not in resolved

    def test_fallback_request_kept_without_detection(self) -> None:
        resolver = GuildResolver(default_guild_id=REAL_GUILD)
        assert resolver.resolve(FALLBACK_GUILD_ID) == FALLBACK_GUILD_ID

    def test_configured_default(self) -> None:
        resolver = GuildResolver(default_guild_id=REAL_GUILD)
        assert resolver.resolve(None) == REAL_GUILD

    def test_placeholder_default_falls_back(self) -> None:
        resolver = GuildResolver(default_guild_id=PLACEHOLDER_SENTINEL)
        assert resolver.resolve(PLACEHOLDER_SENTINEL) == FALLBACK_GUILD_ID

    def test_nothing_configured(self) -> None:
        assert GuildResolver().resolve(None) == FALLBACK_GUILD_ID

    def test_never_raises(self) -> None:
        resolver = GuildResolver()
        for value in (None, "", "   ", "abc", PLACEHOLDER_SENTINEL):
            assert isinstance(resolver.resolve(value), str)
