"""Guild settings mappers.

Two read shapes exist for the same row:

- map_guild_setting: column-for-column, used by the raw settings editor
- map_bot_settings: the grouped shape the bot settings page uses
  (modules map, cooldown in seconds)
"""

from __future__ import annotations

from typing import Any

from aeon_dashboard.db.models import GuildSetting
from aeon_dashboard.utils.ids import to_int
from aeon_dashboard.utils.json import as_dict

DEFAULT_RATELIMIT_PER_MINUTE = 20

# bot settings "modules" key -> GuildSetting column
MODULE_COLUMNS = {
    "moderation": "moderation_enabled",
    "leveling": "levelling_enabled",
    "fun": "fun_enabled",
    "tickets": "tickets_enabled",
    "custom_commands": "custom_commands_enabled",
    "auto_responders": "auto_responders_enabled",
}

SETTING_COLUMNS = (
    "prefix",
    "use_slash_commands",
    "moderation_enabled",
    "levelling_enabled",
    "fun_enabled",
    "tickets_enabled",
    "custom_commands_enabled",
    "auto_responders_enabled",
    "global_cooldown",
)


def map_guild_setting(row: GuildSetting) -> dict[str, Any]:
    record: dict[str, Any] = {"guild_id": row.guild_id}
    for column in SETTING_COLUMNS:
        record[column] = getattr(row, column)
    record["command_cooldown"] = row.command_cooldown
    record["created_at"] = row.created_at
    record["updated_at"] = row.updated_at
    return record


def ratelimit_of(row: GuildSetting) -> int:
    value = as_dict(row.command_cooldown).get("ratelimit_per_minute")
    return to_int(value, DEFAULT_RATELIMIT_PER_MINUTE)


def map_bot_settings(row: GuildSetting) -> dict[str, Any]:
    return {
        "id": row.guild_id,
        "guild_id": row.guild_id,
        "prefix": row.prefix,
        "slash_commands_enabled": row.use_slash_commands,
        "modules": {key: getattr(row, column) for key, column in MODULE_COLUMNS.items()},
        "cooldown_seconds": max(0, round((row.global_cooldown or 0) / 1000)),
        "ratelimit_per_minute": ratelimit_of(row),
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }
