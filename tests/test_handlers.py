"""Unit tests for aeon_dashboard.actions.handlers."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import ProgrammingError

from aeon_dashboard.actions.handlers import commands, moderation, settings, stats, tickets, votes
from aeon_dashboard.actions.registry import ActionContext
from aeon_dashboard.actions.schemas import (
    BotSettingsParams,
    CreateVoteParams,
    CreateWarnParams,
    CustomCommandParams,
    DeleteWarnParams,
    UpdateTriggerParams,
    UUIDParams,
    WarnFilterParams,
)
from aeon_dashboard.db.models import GuildSetting, Ticket, Trigger, WarnRecord
from aeon_dashboard.errors import ConflictError, InvalidParamsError, NotFoundError
from conftest import make_result

OTHER_GUILD = "123123123123123123"


def _compiled_params(session: AsyncMock, index: int = -1) -> dict:
    return session.execute.await_args_list[index].args[0].compile().params


# ---------------------------------------------------------------------------
# Custom commands
# ---------------------------------------------------------------------------


class TestCreateCustomCommand:
    """Tests for createCustomCommand."""

    @pytest.mark.asyncio
    async def test_duplicate_trigger_in_same_guild(
        self, ctx: ActionContext, session: AsyncMock
    ) -> None:
        session.execute.return_value = make_result(scalar=uuid.uuid4())
        params = CustomCommandParams.model_validate({"trigger": "hello", "response": "hi"})

        with pytest.raises(ConflictError, match='"hello" already exists'):
            await commands.create_custom_command(ctx, params)

        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_same_trigger_in_other_guild(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(scalar=None)
        ctx = ActionContext(session=session, guild_id=OTHER_GUILD)
        params = CustomCommandParams.model_validate({"trigger": "hello", "response": "hi"})

        record = await commands.create_custom_command(ctx, params)

        assert record["trigger"] == "hello"
        assert record["guild_id"] == OTHER_GUILD
        assert OTHER_GUILD in _compiled_params(session).values()
        session.add.assert_called_once()
        session.flush.assert_awaited_once()

    def test_name_doubles_as_trigger(self) -> None:
        params = CustomCommandParams.model_validate({"command": {"name": "rules", "response": "x"}})
        assert params.trigger == "rules"


# ---------------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------------


class TestUpdateTrigger:
    """Tests for updateTrigger."""

    @pytest.mark.asyncio
    async def test_not_in_guild(self, ctx: ActionContext, session: AsyncMock) -> None:
        session.execute.return_value = make_result(scalar=None)
        params = UpdateTriggerParams.model_validate({"id": str(uuid.uuid4()), "response": "x"})

        with pytest.raises(NotFoundError):
            await commands.update_trigger(ctx, params)

    @pytest.mark.asyncio
    async def test_switch_to_bad_regex(self, ctx: ActionContext, session: AsyncMock) -> None:
        trigger = Trigger(
            id=uuid.uuid4(), guild_id=ctx.guild_id, trigger_text="(", response="r",
            match_type="contains", enabled=True,
        )
        session.execute.return_value = make_result(scalar=trigger)
        params = UpdateTriggerParams.model_validate({"id": str(trigger.id), "match_type": "regex"})

        with pytest.raises(InvalidParamsError, match="regular expression"):
            await commands.update_trigger(ctx, params)

        session.flush.assert_not_awaited()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestUpdateBotSettings:
    """Tests for updateBotSettings."""

    @pytest.mark.asyncio
    async def test_column_values(self, ctx: ActionContext) -> None:
        params = BotSettingsParams.model_validate(
            {
                "settings": {
                    "prefix": "$",
                    "modules": {"leveling": False},
                    "cooldown_seconds": 5,
                    "ratelimit_per_minute": 60,
                }
            }
        )
        stored = GuildSetting(guild_id=ctx.guild_id, prefix="$", global_cooldown=5000)

        with patch.object(
            settings, "upsert_guild_setting", AsyncMock(return_value=stored)
        ) as upsert:
            result = await settings.update_bot_settings(ctx, params)

        values = upsert.await_args.args[2]
        assert values["levelling_enabled"] is False
        assert values["moderation_enabled"] is True
        assert values["global_cooldown"] == 5000
        assert values["command_cooldown"] == {"ratelimit_per_minute": 60}
        assert result["cooldown_seconds"] == 5

    @pytest.mark.asyncio
    async def test_missing_row_is_none(self, ctx: ActionContext, session: AsyncMock) -> None:
        session.execute.return_value = make_result(scalar=None)
        assert await settings.get_bot_settings(ctx, params=None) is None


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


class TestDashboardStats:
    """Tests for getDashboardStats."""

    @pytest.mark.asyncio
    async def test_missing_table_counts_zero(self, ctx: ActionContext, session: AsyncMock) -> None:
        results = [make_result(scalar=4) for _ in stats.DASHBOARD_COUNTS]
        results[1] = ProgrammingError("SELECT", {}, Exception("no such table"))
        session.execute.side_effect = results

        counts = await stats.get_dashboard_stats(ctx, params=None)

        assert list(counts) == list(stats.DASHBOARD_COUNTS)
        assert counts["memberCount"] == 4
        assert counts["commandCount"] == 0
        assert session.begin_nested.call_count == len(stats.DASHBOARD_COUNTS)


# ---------------------------------------------------------------------------
# Tickets
# ---------------------------------------------------------------------------


class TestTicketTransitions:
    """Tests for claimTicket / closeTicket."""

    @pytest.mark.asyncio
    async def test_close_sets_resolved(self, ctx: ActionContext, session: AsyncMock) -> None:
        ticket = Ticket(id=uuid.uuid4(), guild_id=ctx.guild_id, user_id="1", status="open")
        session.execute.return_value = make_result(scalar=ticket)

        record = await tickets.close_ticket(ctx, UUIDParams(id=ticket.id))

        assert ticket.status == "resolved"
        assert ticket.closed_at is not None
        assert record["status"] == "resolved"

    @pytest.mark.asyncio
    async def test_close_twice(self, ctx: ActionContext, session: AsyncMock) -> None:
        ticket = Ticket(id=uuid.uuid4(), guild_id=ctx.guild_id, user_id="1", status="resolved")
        session.execute.return_value = make_result(scalar=ticket)

        with pytest.raises(ConflictError):
            await tickets.close_ticket(ctx, UUIDParams(id=ticket.id))


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


class TestWarns:
    """Tests for getWarns / createWarn / deleteWarn."""

    @pytest.mark.asyncio
    async def test_create_returns_flat_record(self, ctx: ActionContext) -> None:
        params = CreateWarnParams.model_validate(
            {"warn": {"user_id": "100", "moderator_id": "9", "reason": "spam"}}
        )

        async def append(session, guild_id, user_id, entry):
            return WarnRecord(id=5, guild_id=guild_id, user_id=user_id, warns=[entry])

        with patch.object(moderation, "append_warning", side_effect=append):
            record = await moderation.create_warn(ctx, params)

        assert record["id"].startswith("5-")
        assert record["severity"] == "medium"
        assert record["reason"] == "spam"
        assert record["guild_id"] == ctx.guild_id

    @pytest.mark.asyncio
    async def test_severity_filter(self, ctx: ActionContext, session: AsyncMock) -> None:
        row = WarnRecord(
            id=1,
            guild_id=ctx.guild_id,
            user_id="100",
            warns=[
                {"severity": "high", "timestamp": "2024-01-01T00:00:00Z"},
                {"severity": "low", "timestamp": "2024-01-02T00:00:00Z"},
            ],
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        session.execute.return_value = make_result(scalars=[row])

        warns = await moderation.get_warns(ctx, WarnFilterParams(severity="high"))

        assert [w["severity"] for w in warns] == ["high"]

    @pytest.mark.asyncio
    async def test_delete_reports_removed_entries(
        self, ctx: ActionContext, session: AsyncMock
    ) -> None:
        entries = [{"reason": "a"}, {"reason": "b"}, {"reason": "c"}]
        session.execute.return_value = make_result(rows=[SimpleNamespace(id=12, warns=entries)])
        params = DeleteWarnParams.model_validate({"id": "12-2024-06-01T00:00:00Z"})

        result = await moderation.delete_warn(ctx, params)

        assert result == {"success": True, "deleted_warnings": 3}
        assert ctx.guild_id in _compiled_params(session).values()

    @pytest.mark.asyncio
    async def test_delete_unknown_row(self, ctx: ActionContext, session: AsyncMock) -> None:
        session.execute.return_value = make_result(rows=[])

        with pytest.raises(NotFoundError):
            await moderation.delete_warn(ctx, DeleteWarnParams.model_validate({"record_id": 99}))


# ---------------------------------------------------------------------------
# Votes
# ---------------------------------------------------------------------------


class TestCreateVote:
    """Tests for createVote."""

    @pytest.mark.asyncio
    async def test_past_end_time(self, ctx: ActionContext, session: AsyncMock) -> None:
        params = CreateVoteParams.model_validate(
            {
                "question": "Q",
                "options": ["a", "b"],
                "end_time": (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat(),
            }
        )

        with pytest.raises(InvalidParamsError):
            await votes.create_vote(ctx, params)

        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_options_stored_with_zero_votes(
        self, ctx: ActionContext, session: AsyncMock
    ) -> None:
        params = CreateVoteParams.model_validate(
            {"vote": {"question": "Q", "options": [{"text": "a"}, "b"]}}
        )

        record = await votes.create_vote(ctx, params)

        assert record["options"] == [{"text": "a", "votes": 0}, {"text": "b", "votes": 0}]
        assert record["is_active"] is True
        session.add.assert_called_once()
