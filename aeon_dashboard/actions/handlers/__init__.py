"""Action handlers, one module per dashboard page.

Importing this package registers every handler with
``aeon_dashboard.actions.registry.registry``.
"""

from aeon_dashboard.actions.handlers import (  # noqa: F401
    audit,
    commands,
    discovery,
    embeds,
    info,
    members,
    moderation,
    roles,
    settings,
    stats,
    tickets,
    votes,
)
