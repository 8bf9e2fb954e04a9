"""Mappers for converting ORM rows to dashboard JSON records."""

from aeon_dashboard.actions.mappers.audit import (
    map_audit_log,
    matches_search,
    severity_from_action,
)
from aeon_dashboard.actions.mappers.command import (
    map_auto_responder,
    map_custom_command,
    map_trigger,
)
from aeon_dashboard.actions.mappers.embed import (
    build_embed_data,
    map_embed,
)
from aeon_dashboard.actions.mappers.guild import (
    map_button_role,
    map_info_topic,
    map_member,
    map_reaction_role,
)
from aeon_dashboard.actions.mappers.moderation import (
    flatten_warns,
    map_blacklist_entry,
    map_scan,
    map_warn_entry,
)
from aeon_dashboard.actions.mappers.settings import (
    MODULE_COLUMNS,
    map_bot_settings,
    map_guild_setting,
)
from aeon_dashboard.actions.mappers.ticket import (
    map_ticket,
    map_ticket_panel,
    normalize_ticket_status,
    status_filter_values,
)
from aeon_dashboard.actions.mappers.vote import (
    is_vote_active,
    map_vote,
    map_vote_cast,
    tally_results,
)

__all__ = [
    "map_audit_log",
    "matches_search",
    "severity_from_action",
    "map_auto_responder",
    "map_custom_command",
    "map_trigger",
    "build_embed_data",
    "map_embed",
    "map_button_role",
    "map_info_topic",
    "map_member",
    "map_reaction_role",
    "flatten_warns",
    "map_blacklist_entry",
    "map_scan",
    "map_warn_entry",
    "MODULE_COLUMNS",
    "map_bot_settings",
    "map_guild_setting",
    "map_ticket",
    "map_ticket_panel",
    "normalize_ticket_status",
    "status_filter_values",
    "is_vote_active",
    "map_vote",
    "map_vote_cast",
    "tally_results",
]
