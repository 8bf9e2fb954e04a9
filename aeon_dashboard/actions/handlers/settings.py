"""Guild settings handlers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import MODULE_COLUMNS, map_bot_settings, map_guild_setting
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import BotSettingsParams, GuildSettingParams
from aeon_dashboard.db.models import GuildSetting
from aeon_dashboard.db.repositories import upsert_guild_setting


async def _load(ctx: ActionContext) -> GuildSetting | None:
    result = await ctx.session.execute(
        select(GuildSetting).where(GuildSetting.guild_id == ctx.guild_id)
    )
    return result.scalar_one_or_none()


@registry.action(ActionName.GET_GUILD_SETTING)
async def get_guild_setting(ctx: ActionContext, params: ActionParams) -> dict[str, Any] | None:
    row = await _load(ctx)
    return map_guild_setting(row) if row else None


@registry.action(ActionName.UPSERT_GUILD_SETTING, GuildSettingParams)
async def upsert_setting(ctx: ActionContext, params: GuildSettingParams) -> dict[str, Any]:
    row = await upsert_guild_setting(ctx.session, ctx.guild_id, params.column_values())
    return map_guild_setting(row)


@registry.action(ActionName.GET_BOT_SETTINGS)
async def get_bot_settings(ctx: ActionContext, params: ActionParams) -> dict[str, Any] | None:
    row = await _load(ctx)
    return map_bot_settings(row) if row else None


@registry.action(ActionName.UPDATE_BOT_SETTINGS, BotSettingsParams)
async def update_bot_settings(ctx: ActionContext, params: BotSettingsParams) -> dict[str, Any]:
    # Modules the form leaves out are switched on
    values: dict[str, Any] = {
        column: params.modules.get(key, True) for key, column in MODULE_COLUMNS.items()
    }
    values.update(
        prefix=params.prefix,
        use_slash_commands=params.slash_commands_enabled,
        global_cooldown=params.cooldown_seconds * 1000,
        command_cooldown={"ratelimit_per_minute": params.ratelimit_per_minute},
    )
    row = await upsert_guild_setting(ctx.session, ctx.guild_id, values)
    return map_bot_settings(row)
