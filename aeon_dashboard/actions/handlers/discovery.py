"""Discovery handlers: guild picker and schema inspection."""

from __future__ import annotations

from typing import Any

from sqlalchemy import text

from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.db.repositories import discover_guilds

_SCHEMA_COLUMNS = text(
    """
    SELECT table_name, column_name, data_type, is_nullable, column_default
    FROM information_schema.columns
    WHERE table_schema = 'public'
    ORDER BY table_name, ordinal_position
    """
)


@registry.action(ActionName.DISCOVER_GUILDS)
async def discover(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    return list(await discover_guilds(ctx.session))


@registry.action(ActionName.INSPECT_SCHEMA)
async def inspect_schema(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(_SCHEMA_COLUMNS)
    return [dict(row) for row in result.mappings().all()]
