"""Unit tests for the ticket, vote, moderation and scoped repositories."""

from __future__ import annotations

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from aeon_dashboard.db.models import Vote, VoteCast, WarnRecord
from aeon_dashboard.db.repositories import (
    append_warning,
    cast_vote,
    delete_in_guild,
    delete_panel_with_tickets,
    get_in_guild,
)
from aeon_dashboard.errors import ConflictError, InvalidParamsError, NotFoundError
from aeon_dashboard.utils.time import utcnow
from conftest import make_result

GUILD = "987654321098765432"


def _statement_table(call) -> str:
    return call.args[0].table.name


# ---------------------------------------------------------------------------
# delete_panel_with_tickets
# ---------------------------------------------------------------------------


class TestDeletePanelWithTickets:
    """Tests for delete_panel_with_tickets."""

    @pytest.mark.asyncio
    async def test_tickets_deleted_before_panel(self, session: AsyncMock) -> None:
        panel_id = uuid.uuid4()
        session.execute.side_effect = [
            make_result(scalar=panel_id),
            make_result(rowcount=4),
            make_result(rowcount=1),
        ]

        deleted = await delete_panel_with_tickets(session, GUILD, panel_id)

        assert deleted == 4
        calls = session.execute.await_args_list
        assert _statement_table(calls[1]) == "tickets"
        assert _statement_table(calls[2]) == "ticket_panels"

    @pytest.mark.asyncio
    async def test_missing_panel(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(scalar=None)

        assert await delete_panel_with_tickets(session, GUILD, uuid.uuid4()) is None
        assert session.execute.await_count == 1


# ---------------------------------------------------------------------------
# cast_vote
# ---------------------------------------------------------------------------


def _open_vote(vote_id: uuid.UUID, **overrides) -> Vote:
    data = dict(
        id=vote_id,
        guild_id=GUILD,
        question="Q",
        options=[{"text": "A", "votes": 0}, {"text": "B", "votes": 0}],
        is_active=True,
        end_time=utcnow() + timedelta(hours=1),
        total_votes=0,
    )
    data.update(overrides)
    return Vote(**data)


class TestCastVote:
    """Tests for cast_vote."""

    @pytest.mark.asyncio
    async def test_first_cast(self, session: AsyncMock) -> None:
        vote_id = uuid.uuid4()
        session.execute.side_effect = [
            make_result(scalar=None),
            make_result(scalar=_open_vote(vote_id)),
            make_result(rowcount=1),
        ]

        cast = await cast_vote(session, GUILD, vote_id, "42", 1)

        assert cast.option_index == 1
        assert cast.user_id == "42"
        session.add.assert_called_once_with(cast)
        session.flush.assert_awaited_once()
        assert session.execute.await_count == 3
        assert _statement_table(session.execute.await_args_list[2]) == "votes"

    @pytest.mark.asyncio
    async def test_second_cast_rejected_without_counter_update(
        self, session: AsyncMock
    ) -> None:
        vote_id = uuid.uuid4()
        session.execute.return_value = make_result(
            scalar=VoteCast(vote_id=vote_id, user_id="42", option_index=0)
        )

        with pytest.raises(ConflictError):
            await cast_vote(session, GUILD, vote_id, "42", 1)

        assert session.execute.await_count == 1
        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_race_on_insert_is_conflict(self, session: AsyncMock) -> None:
        vote_id = uuid.uuid4()
        session.execute.side_effect = [
            make_result(scalar=None),
            make_result(scalar=_open_vote(vote_id)),
        ]
        session.flush.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(ConflictError):
            await cast_vote(session, GUILD, vote_id, "42", 0)

        assert session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_vote(self, session: AsyncMock) -> None:
        session.execute.side_effect = [make_result(scalar=None), make_result(scalar=None)]

        with pytest.raises(NotFoundError):
            await cast_vote(session, GUILD, uuid.uuid4(), "42", 0)

    @pytest.mark.asyncio
    async def test_ended_vote(self, session: AsyncMock) -> None:
        vote_id = uuid.uuid4()
        session.execute.side_effect = [
            make_result(scalar=None),
            make_result(scalar=_open_vote(vote_id, end_time=utcnow() - timedelta(minutes=1))),
        ]

        with pytest.raises(ConflictError):
            await cast_vote(session, GUILD, vote_id, "42", 0)

    @pytest.mark.asyncio
    async def test_option_out_of_range(self, session: AsyncMock) -> None:
        vote_id = uuid.uuid4()
        session.execute.side_effect = [
            make_result(scalar=None),
            make_result(scalar=_open_vote(vote_id)),
        ]

        with pytest.raises(InvalidParamsError):
            await cast_vote(session, GUILD, vote_id, "42", 5)

        session.add.assert_not_called()


# ---------------------------------------------------------------------------
# append_warning
# ---------------------------------------------------------------------------


class TestAppendWarning:
    """Tests for append_warning."""

    @pytest.mark.asyncio
    async def test_single_upsert_statement(self, session: AsyncMock) -> None:
        stored = WarnRecord(id=7, guild_id=GUILD, user_id="100", warns=[{"reason": "x"}])
        session.execute.return_value = make_result(scalar=stored)

        row = await append_warning(session, GUILD, "100", {"reason": "x"})

        assert row is stored
        assert session.execute.await_count == 1
        stmt = session.execute.await_args.args[0]
        assert stmt.table.name == "warns_data"
        assert "ON CONFLICT" in str(stmt.compile(dialect=postgresql.dialect()))


# ---------------------------------------------------------------------------
# get_in_guild / delete_in_guild
# ---------------------------------------------------------------------------


class TestScopedRepository:
    """Tests for guild-scoped lookups."""

    @pytest.mark.asyncio
    async def test_get_filters_on_guild(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(scalar=None)

        assert await get_in_guild(session, Vote, uuid.uuid4(), GUILD) is None

        compiled = session.execute.await_args.args[0].compile()
        assert "votes.guild_id" in str(compiled)
        assert GUILD in compiled.params.values()

    @pytest.mark.asyncio
    async def test_delete_returns_rowcount(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(rowcount=1)
        assert await delete_in_guild(session, Vote, uuid.uuid4(), GUILD) == 1

    @pytest.mark.asyncio
    async def test_delete_in_other_guild(self, session: AsyncMock) -> None:
        session.execute.return_value = make_result(rowcount=0)
        assert await delete_in_guild(session, Vote, uuid.uuid4(), "1") == 0
