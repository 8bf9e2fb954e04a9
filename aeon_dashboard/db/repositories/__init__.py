"""Repository layer for database operations.

Holds the queries that are more than a single statement, or that are
shared between the action handlers, the bootstrap and the CLI.
"""

from aeon_dashboard.db.repositories.guild_repository import (
    DiscoveredGuild,
    detect_primary_guild,
    discover_guilds,
    merge_discovered,
    upsert_guild_setting,
)
from aeon_dashboard.db.repositories.moderation_repository import (
    append_warning,
    delete_warn_record,
)
from aeon_dashboard.db.repositories.scoped_repository import delete_in_guild, get_in_guild
from aeon_dashboard.db.repositories.ticket_repository import delete_panel_with_tickets
from aeon_dashboard.db.repositories.vote_repository import cast_vote, get_existing_cast

__all__ = [
    "DiscoveredGuild",
    "detect_primary_guild",
    "discover_guilds",
    "merge_discovered",
    "upsert_guild_setting",
    "append_warning",
    "delete_warn_record",
    "delete_in_guild",
    "get_in_guild",
    "delete_panel_with_tickets",
    "cast_vote",
    "get_existing_cast",
]
