"""Moderation repository: warning storage."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from aeon_dashboard.db.models import WarnRecord
from aeon_dashboard.utils.json import as_list


async def append_warning(
    session: AsyncSession, guild_id: str, user_id: str, entry: dict[str, Any]
) -> WarnRecord:
    """Append one warning to the user's warns array, creating the row if needed.

    Existing entries are never rewritten; the new entry is concatenated
    onto the stored array in the same statement.

    Args:
        session: Database session
        guild_id: Resolved guild id
        user_id: Warned user
        entry: Warning object (moderator_id, reason, severity, timestamp)

    Returns:
        The stored row, with the new entry last in ``warns``
    """
    insert_stmt = pg_insert(WarnRecord).values(
        guild_id=guild_id, user_id=user_id, warns=[entry]
    )
    stmt = insert_stmt.on_conflict_do_update(
        index_elements=["guild_id", "user_id"],
        set_={
            "warns": WarnRecord.__table__.c.warns.op("||")(insert_stmt.excluded.warns),
            "updated_at": func.now(),
        },
    ).returning(WarnRecord)

    result = await session.execute(
        stmt, execution_options={"populate_existing": True}
    )
    return result.scalar_one()


async def delete_warn_record(
    session: AsyncSession, record_id: int, guild_id: str
) -> int | None:
    """Delete a user's warning row within guild_id.

    Returns:
        Number of warning entries the row held, or None if no row matched
    """
    result = await session.execute(
        delete(WarnRecord)
        .where(WarnRecord.id == record_id, WarnRecord.guild_id == guild_id)
        .returning(WarnRecord.id, WarnRecord.warns)
    )
    row = result.first()
    if row is None:
        return None
    return len(as_list(row.warns))
