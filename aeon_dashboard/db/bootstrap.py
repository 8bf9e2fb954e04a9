"""Idempotent schema bootstrap.

Creates every table in Base.metadata that does not exist yet. Safe to
run against a database the bot has already populated, and safe to run
from several processes at once: "already exists" errors raised by a
concurrent creator are treated as success.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine

from aeon_dashboard.db.models import Base

logger = logging.getLogger(__name__)

# duplicate_table, duplicate_object
ALREADY_EXISTS_SQLSTATES = frozenset({"42P07", "42710"})


def sqlstate_of(error: DBAPIError) -> str | None:
    """Extract the Postgres SQLSTATE from a wrapped driver error."""
    orig = getattr(error, "orig", None)
    # asyncpg's adapter exposes .sqlstate, psycopg exposes .pgcode
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


async def bootstrap_schema(engine: AsyncEngine) -> int:
    """Create missing tables and indexes.

    Each table is created in its own transaction so that one "already
    exists" failure does not abort the rest.

    Args:
        engine: Engine to create the schema on

    Returns:
        Number of tables processed
    """
    tables = Base.metadata.sorted_tables
    for table in tables:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(table.create, checkfirst=True)
        except DBAPIError as e:
            if sqlstate_of(e) in ALREADY_EXISTS_SQLSTATES:
                logger.debug(f"{table.name} already exists, skipping")
                continue
            raise

    logger.info(f"Schema ready ({len(tables)} tables)")
    return len(tables)
