"""Guild resolution.

Decides which guild an action operates on. The browser may send no guild
id, the "not configured" placeholder from an unedited .env, or the
hard-coded fallback id; none of those should be used as a tenant key
when a real guild is known.

Resolution order for ``GuildResolver.resolve(requested)``:

1. requested, if it is a real id (not a placeholder, not the fallback)
2. the guild auto-detected from the database at bootstrap
3. requested, if it is non-empty (this is the fallback id itself)
4. the configured default guild, or the fallback id if that is unset
"""

from __future__ import annotations

from typing import Any

PLACEHOLDER_SENTINEL = "your_discord_guild_id_here"
FALLBACK_GUILD_ID = "1234567890123456789"


def is_placeholder(guild_id: str | None) -> bool:
    """True for empty ids and ids containing the "not configured" sentinel."""
    if not guild_id:
        return True
    return PLACEHOLDER_SENTINEL in guild_id


def normalize_guild_id(raw: Any) -> str | None:
    """Turn a client-supplied guild id into a string, or None if absent.

    Placeholders become None here, at the request boundary, so that code
    past this point only sees real ids or None.
    """
    if raw is None:
        return None
    value = str(raw).strip()
    return None if is_placeholder(value) else value


class GuildResolver:
    """Resolves the effective guild id for a request.

    Holds the process-wide auto-detected guild id, which the service
    fills in once during bootstrap.
    """

    def __init__(
        self,
        default_guild_id: str | None = None,
        auto_detected: str | None = None,
    ) -> None:
        self.default_guild_id = default_guild_id
        self.auto_detected = auto_detected

    def resolve(self, requested: str | None) -> str:
        """Return the guild id to scope a request to. Never raises."""
        requested = (requested or "").strip()

        if requested and not is_placeholder(requested) and requested != FALLBACK_GUILD_ID:
            return requested

        if self.auto_detected:
            return self.auto_detected

        if requested and not is_placeholder(requested):
            return requested

        if is_placeholder(self.default_guild_id):
            return FALLBACK_GUILD_ID
        return self.default_guild_id
