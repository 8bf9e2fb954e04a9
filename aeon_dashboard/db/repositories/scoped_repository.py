"""Guild-scoped lookups shared by the action handlers.

Every read and write by id also filters on guild_id, so an id from one
guild can never reach a row in another.
"""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from aeon_dashboard.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


async def get_in_guild(
    session: AsyncSession, model: type[ModelT], row_id: Any, guild_id: str
) -> ModelT | None:
    """Fetch one row by primary key, or None if it is not in guild_id."""
    result = await session.execute(
        select(model).where(model.id == row_id, model.guild_id == guild_id)
    )
    return result.scalar_one_or_none()


async def delete_in_guild(
    session: AsyncSession, model: type[Base], row_id: Any, guild_id: str
) -> int:
    """Delete one row by primary key within guild_id.

    Returns:
        Number of rows deleted (0 or 1)
    """
    result = await session.execute(
        delete(model).where(model.id == row_id, model.guild_id == guild_id)
    )
    return result.rowcount or 0
