"""Action dispatch layer.

Usage:
    dispatcher = ActionDispatcher(service)
    data = await dispatcher.dispatch("getTriggers", {"guildId": "..."})
"""

from aeon_dashboard.actions import handlers  # noqa: F401  (registers handlers)
from aeon_dashboard.actions.dispatcher import ActionDispatcher
from aeon_dashboard.actions.registry import (
    ActionContext,
    ActionName,
    ActionParams,
    ActionRegistry,
    registry,
)

__all__ = [
    "ActionContext",
    "ActionDispatcher",
    "ActionName",
    "ActionParams",
    "ActionRegistry",
    "registry",
]
