"""Guild repository: discovery, auto-detection and settings upsert."""

from __future__ import annotations

import logging
from typing import Any, Iterable, TypedDict

from sqlalchemy import func, literal, select, union_all
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aeon_dashboard.db.models import (
    AuditLog,
    AutoResponder,
    ButtonRole,
    CustomCommand,
    GuildSetting,
    InfoTopic,
    Member,
    ReactionRole,
    Ticket,
    TicketPanel,
    Trigger,
    Vote,
    WarnRecord,
)

logger = logging.getLogger(__name__)

# Tables scanned by discover_guilds(). Fixed list; table names never come
# from user input.
DISCOVERY_MODELS = (
    GuildSetting,
    CustomCommand,
    AutoResponder,
    Ticket,
    AuditLog,
    Member,
    ReactionRole,
    ButtonRole,
    InfoTopic,
    Vote,
    Trigger,
    WarnRecord,
    TicketPanel,
)

# Tables pooled by detect_primary_guild().
AUTO_DETECT_MODELS = (
    Member,
    CustomCommand,
    AutoResponder,
    Ticket,
    TicketPanel,
    AuditLog,
    GuildSetting,
)


class DiscoveredGuild(TypedDict):
    guild_id: str
    source: str
    count: int


async def detect_primary_guild(session: AsyncSession) -> str | None:
    """Return the guild id with the most rows across AUTO_DETECT_MODELS.

    Row counts from every table are pooled before ranking. Returns None if
    the database is empty or the query fails (e.g. a table is missing).

    Args:
        session: Database session
    """
    pooled = union_all(
        *(select(model.guild_id.label("guild_id")) for model in AUTO_DETECT_MODELS)
    ).subquery("all_guilds")

    stmt = (
        select(pooled.c.guild_id, func.count().label("row_count"))
        .where(pooled.c.guild_id.is_not(None))
        .group_by(pooled.c.guild_id)
        .order_by(func.count().desc())
        .limit(1)
    )

    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as e:
        logger.warning(f"Guild auto-detection failed: {e}")
        return None

    row = result.first()
    return str(row.guild_id) if row else None


async def _count_guilds_in(session: AsyncSession, model: Any) -> list[DiscoveredGuild]:
    """Per-guild row counts for one table; empty if the table is unusable."""
    table_name = model.__tablename__
    stmt = (
        select(
            model.guild_id.label("guild_id"),
            literal(table_name).label("source"),
            func.count().label("count"),
        )
        .where(model.guild_id.is_not(None))
        .group_by(model.guild_id)
    )

    try:
        # Savepoint: a failed statement must not poison the outer transaction
        async with session.begin_nested():
            result = await session.execute(stmt)
            rows = result.all()
    except SQLAlchemyError as e:
        logger.debug(f"Skipping {table_name} during discovery: {e}")
        return []

    return [
        DiscoveredGuild(guild_id=str(r.guild_id), source=r.source, count=int(r.count))
        for r in rows
    ]


def merge_discovered(rows: Iterable[DiscoveredGuild]) -> list[DiscoveredGuild]:
    """Merge per-table counts into one entry per guild.

    Counts are summed across tables. The source label is taken from the
    first row seen for a guild. Result is sorted by count, descending.
    """
    merged: dict[str, DiscoveredGuild] = {}
    for row in rows:
        existing = merged.get(row["guild_id"])
        if existing:
            existing["count"] += row["count"]
        else:
            merged[row["guild_id"]] = DiscoveredGuild(
                guild_id=row["guild_id"], source=row["source"], count=row["count"]
            )

    return sorted(merged.values(), key=lambda r: r["count"], reverse=True)


async def discover_guilds(session: AsyncSession) -> list[DiscoveredGuild]:
    """List every guild id present anywhere in the database.

    Issues one query per table in DISCOVERY_MODELS. Missing or broken
    tables contribute nothing instead of failing the whole scan.

    Args:
        session: Database session

    Returns:
        One entry per guild, most rows first
    """
    found: list[DiscoveredGuild] = []
    for model in DISCOVERY_MODELS:
        found.extend(await _count_guilds_in(session, model))
    return merge_discovered(found)


async def upsert_guild_setting(
    session: AsyncSession, guild_id: str, values: dict[str, Any]
) -> GuildSetting:
    """Insert or update the settings row for guild_id.

    Args:
        session: Database session
        guild_id: Resolved guild id (primary key)
        values: Column values, excluding guild_id

    Returns:
        The stored row
    """
    insert_stmt = pg_insert(GuildSetting).values(guild_id=guild_id, **values)
    stmt = insert_stmt.on_conflict_do_update(
        index_elements=["guild_id"],
        set_={
            **{key: getattr(insert_stmt.excluded, key) for key in values},
            "updated_at": func.now(),
        },
    ).returning(GuildSetting)

    result = await session.execute(
        stmt, execution_options={"populate_existing": True}
    )
    return result.scalar_one()
