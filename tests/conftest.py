"""Shared fixtures for aeon-dashboard tests."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from aeon_dashboard.actions.registry import ActionContext
from aeon_dashboard.core.guilds import GuildResolver


class FakeTransaction:
    """Stand-in for session.begin()/begin_nested(); never swallows errors."""

    async def __aenter__(self) -> "FakeTransaction":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False


def make_result(
    scalar: Any = None,
    scalars: list | None = None,
    rows: list | None = None,
    rowcount: int | None = None,
) -> MagicMock:
    """Build a mock Result covering the accessors the code under test uses."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.scalar_one.return_value = scalar
    result.scalars.return_value.all.return_value = scalars or []
    result.all.return_value = rows or []
    result.first.return_value = (rows or [None])[0]
    result.rowcount = rowcount
    return result


@pytest.fixture
def guild_id() -> str:
    """A real-looking guild snowflake."""
    return "987654321098765432"


@pytest.fixture
def session() -> AsyncMock:
    session = AsyncMock()
    session.add = MagicMock()
    session.begin = MagicMock(side_effect=lambda: FakeTransaction())
    session.begin_nested = MagicMock(side_effect=lambda: FakeTransaction())
    return session


@pytest.fixture
def ctx(session: AsyncMock, guild_id: str) -> ActionContext:
    return ActionContext(session=session, guild_id=guild_id)


@pytest.fixture
def service(session: AsyncMock) -> MagicMock:
    """DashboardService stand-in whose session() yields the mock session."""

    @asynccontextmanager
    async def open_session():
        yield session

    svc = MagicMock()
    svc.ensure_bootstrapped = AsyncMock()
    svc.health = AsyncMock()
    svc.close = AsyncMock()
    svc.resolver = GuildResolver(default_guild_id=None)
    svc.session = open_session
    return svc
