"""Unit tests for aeon_dashboard.db.repositories.guild_repository."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import ProgrammingError

from aeon_dashboard.actions.mappers import map_guild_setting
from aeon_dashboard.db.models import GuildSetting
from aeon_dashboard.db.repositories import (
    DiscoveredGuild,
    detect_primary_guild,
    discover_guilds,
    merge_discovered,
    upsert_guild_setting,
)
from aeon_dashboard.db.repositories.guild_repository import DISCOVERY_MODELS
from conftest import make_result

GUILD_A = "111111111111111111"
GUILD_B = "222222222222222222"


def _row(guild_id: str, source: str, count: int) -> SimpleNamespace:
    return SimpleNamespace(guild_id=guild_id, source=source, count=count)


# ---------------------------------------------------------------------------
# merge_discovered
# ---------------------------------------------------------------------------


class TestMergeDiscovered:
    """Tests for merge_discovered."""

    def test_counts_are_summed_per_guild(self) -> None:
        merged = merge_discovered(
            [
                DiscoveredGuild(guild_id=GUILD_A, source="custom_commands", count=3),
                DiscoveredGuild(guild_id=GUILD_A, source="triggers", count=5),
            ]
        )
        assert merged == [
            DiscoveredGuild(guild_id=GUILD_A, source="custom_commands", count=8)
        ]

    def test_sorted_by_count_descending(self) -> None:
        merged = merge_discovered(
            [
                DiscoveredGuild(guild_id=GUILD_A, source="members", count=2),
                DiscoveredGuild(guild_id=GUILD_B, source="members", count=7),
            ]
        )
        assert [g["guild_id"] for g in merged] == [GUILD_B, GUILD_A]

    def test_does_not_mutate_input(self) -> None:
        first = DiscoveredGuild(guild_id=GUILD_A, source="members", count=1)
        merge_discovered([first, DiscoveredGuild(guild_id=GUILD_A, source="x", count=1)])
        assert first["count"] == 1

    def test_empty(self) -> None:
        assert merge_discovered([]) == []


# ---------------------------------------------------------------------------
# discover_guilds
# ---------------------------------------------------------------------------


class TestDiscoverGuilds:
    """Tests for discover_guilds."""

    @pytest.mark.asyncio
    async def test_missing_table_is_skipped(self, session: AsyncMock) -> None:
        results = [
            make_result(rows=[_row(GUILD_A, "first", 3)]),
            ProgrammingError("SELECT", {}, Exception("relation does not exist")),
        ]
        results += [make_result(rows=[]) for _ in DISCOVERY_MODELS[2:]]
        results[2] = make_result(rows=[_row(GUILD_A, "third", 5)])
        session.execute.side_effect = results

        guilds = await discover_guilds(session)

        assert guilds == [DiscoveredGuild(guild_id=GUILD_A, source="first", count=8)]
        assert session.execute.await_count == len(DISCOVERY_MODELS)
        assert session.begin_nested.call_count == len(DISCOVERY_MODELS)

    @pytest.mark.asyncio
    async def test_empty_database(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(rows=[])
        assert await discover_guilds(session) == []


# ---------------------------------------------------------------------------
# detect_primary_guild
# ---------------------------------------------------------------------------


class TestDetectPrimaryGuild:
    """Tests for detect_primary_guild."""

    @pytest.mark.asyncio
    async def test_returns_top_guild(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(
            rows=[SimpleNamespace(guild_id=GUILD_B, row_count=12)]
        )
        assert await detect_primary_guild(session) == GUILD_B

    @pytest.mark.asyncio
    async def test_empty_database(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(rows=[])
        assert await detect_primary_guild(session) is None

    @pytest.mark.asyncio
    async def test_query_failure_is_none(self, session: AsyncMock) -> None:
        session.execute.side_effect = ProgrammingError("SELECT", {}, Exception("boom"))
        assert await detect_primary_guild(session) is None


# ---------------------------------------------------------------------------
# upsert_guild_setting
# ---------------------------------------------------------------------------


class TestUpsertGuildSetting:
    """Tests for upsert_guild_setting."""

    @pytest.mark.asyncio
    async def test_round_trip(self, session: AsyncMock) -> None:
        values = {
            "prefix": "?",
            "use_slash_commands": False,
            "moderation_enabled": True,
            "levelling_enabled": False,
            "fun_enabled": True,
            "tickets_enabled": False,
            "custom_commands_enabled": True,
            "auto_responders_enabled": True,
            "global_cooldown": 2000,
            "command_cooldown": {"ratelimit_per_minute": 30},
        }

        async def execute(stmt, *args, **kwargs):
            # Echo back what the INSERT would store
            params = stmt.compile(dialect=postgresql.dialect()).params
            return make_result(scalar=GuildSetting(**params))

        session.execute.side_effect = execute

        row = await upsert_guild_setting(session, GUILD_A, values)
        record = map_guild_setting(row)

        assert record["guild_id"] == GUILD_A
        for key, value in values.items():
            assert record[key] == value

    @pytest.mark.asyncio
    async def test_populates_existing(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(scalar=GuildSetting(guild_id=GUILD_A))

        await upsert_guild_setting(session, GUILD_A, {"prefix": "!"})

        kwargs = session.execute.await_args.kwargs
        assert kwargs["execution_options"] == {"populate_existing": True}
