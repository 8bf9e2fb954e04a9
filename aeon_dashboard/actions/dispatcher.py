"""Action dispatcher.

Single entry point for ``{action, params}`` requests:

1. Look up the action (UnknownActionError for anything unregistered)
2. Validate params against the action's model (InvalidParamsError)
3. Wait for the one-shot bootstrap
4. Resolve the guild the request is scoped to
5. Run the handler inside one transaction

Validation happens before bootstrap, so a malformed request never touches
the database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError

from aeon_dashboard.actions.registry import ActionContext, ActionRegistry, registry
from aeon_dashboard.errors import ActionError, ConflictError

if TYPE_CHECKING:
    from aeon_dashboard.core import DashboardService

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Runs registered actions against a DashboardService."""

    def __init__(
        self, service: DashboardService, actions: ActionRegistry | None = None
    ) -> None:
        self.service = service
        self.actions = actions or registry

    async def dispatch(self, action: Any, params: dict[str, Any] | None = None) -> Any:
        """Run one action and return its JSON-serializable result.

        Raises:
            UnknownActionError: action is missing or not registered
            InvalidParamsError: params failed validation
            NotFoundError: update/delete target does not exist in the guild
            ConflictError: write violates a uniqueness rule
        """
        registered = self.actions.get(action)
        parsed = registered.parse(params)

        await self.service.ensure_bootstrapped()
        guild_id = self.service.resolver.resolve(parsed.guild_id)

        logger.debug(f"{registered.name.value} guild={guild_id}")

        async with self.service.session() as session:
            try:
                async with session.begin():
                    ctx = ActionContext(session=session, guild_id=guild_id)
                    return await registered.handler(ctx, parsed)
            except IntegrityError as e:
                raise ConflictError(_integrity_message(e)) from e
            except ActionError:
                raise
            except Exception:
                logger.exception(f"Action {registered.name.value} failed")
                raise


def _integrity_message(error: IntegrityError) -> str:
    detail = str(getattr(error, "orig", None) or error).strip().splitlines()
    return f"Conflict: {detail[0]}" if detail else "Conflict with an existing record"
