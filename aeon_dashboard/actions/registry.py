"""Action registry.

Maps each ``ActionName`` to one handler plus the pydantic model its params
are validated against. Handlers register themselves with the module-level
``registry`` via the ``@registry.action(...)`` decorator when their module is
imported (see ``aeon_dashboard.actions.handlers``).

Handler interface:

    async def handler(ctx: ActionContext, params: SomeParams) -> Any
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic import field_validator, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from aeon_dashboard.core.guilds import normalize_guild_id
from aeon_dashboard.errors import InvalidParamsError, UnknownActionError


class ActionName(str, Enum):
    """Every action the dashboard can dispatch."""

    # Discovery
    DISCOVER_GUILDS = "discoverGuilds"
    INSPECT_SCHEMA = "inspectSchema"

    # Stats
    GET_DASHBOARD_STATS = "getDashboardStats"
    GET_GUILD_STATS = "getGuildStats"
    GET_RECENT_ACTIVITY = "getRecentActivity"
    GET_ACTIVITY_ANALYTICS = "getActivityAnalytics"
    GET_TOP_CHANNELS = "getTopChannels"

    # Members
    GET_MEMBERS = "getMembers"
    GET_TOP_MEMBERS = "getTopMembers"

    # Settings
    GET_GUILD_SETTING = "getGuildSetting"
    UPSERT_GUILD_SETTING = "upsertGuildSetting"
    GET_BOT_SETTINGS = "getBotSettings"
    UPDATE_BOT_SETTINGS = "updateBotSettings"

    # Custom commands
    GET_CUSTOM_COMMANDS = "getCustomCommands"
    CREATE_CUSTOM_COMMAND = "createCustomCommand"
    UPDATE_CUSTOM_COMMAND = "updateCustomCommand"
    DELETE_CUSTOM_COMMAND = "deleteCustomCommand"

    # Auto responders
    GET_AUTO_RESPONDERS = "getAutoResponders"
    CREATE_AUTO_RESPONDER = "createAutoResponder"
    UPDATE_AUTO_RESPONDER = "updateAutoResponder"
    DELETE_AUTO_RESPONDER = "deleteAutoResponder"

    # Triggers
    GET_TRIGGERS = "getTriggers"
    CREATE_TRIGGER = "createTrigger"
    UPDATE_TRIGGER = "updateTrigger"
    DELETE_TRIGGER = "deleteTrigger"

    # Tickets
    GET_TICKETS = "getTickets"
    CLAIM_TICKET = "claimTicket"
    CLOSE_TICKET = "closeTicket"
    DELETE_TICKET = "deleteTicket"
    GET_TICKET_PANELS = "getTicketPanels"
    CREATE_TICKET_PANEL = "createTicketPanel"
    DELETE_TICKET_PANEL = "deleteTicketPanel"

    # Audit
    GET_AUDIT_LOGS = "getAuditLogs"
    DELETE_AUDIT_LOG = "deleteAuditLog"

    # Moderation
    GET_WARNS = "getWarns"
    CREATE_WARN = "createWarn"
    DELETE_WARN = "deleteWarn"
    GET_BLACKLIST = "getBlacklist"
    CREATE_BLACKLIST = "createBlacklist"
    DELETE_BLACKLIST = "deleteBlacklist"
    GET_SCANS = "getScans"
    CREATE_SCAN = "createScan"

    # Votes
    GET_ACTIVE_VOTES = "getActiveVotes"
    GET_ALL_VOTES = "getAllVotes"
    CREATE_VOTE = "createVote"
    DELETE_VOTE = "deleteVote"
    CAST_VOTE = "castVote"
    GET_VOTE_RESULTS = "getVoteResults"

    # Embeds
    GET_EMBEDS = "getEmbeds"
    CREATE_EMBED = "createEmbed"
    DELETE_EMBED = "deleteEmbed"

    # Info topics
    GET_INFO_TOPICS = "getInfoTopics"
    CREATE_INFO_TOPIC = "createInfoTopic"
    UPDATE_INFO_TOPIC = "updateInfoTopic"
    DELETE_INFO_TOPIC = "deleteInfoTopic"

    # Roles
    GET_REACTION_ROLES = "getReactionRoles"
    CREATE_REACTION_ROLE = "createReactionRole"
    DELETE_REACTION_ROLE = "deleteReactionRole"
    GET_BUTTON_ROLES = "getButtonRoles"
    CREATE_BUTTON_ROLE = "createButtonRole"
    DELETE_BUTTON_ROLE = "deleteButtonRole"


class ActionParams(BaseModel):
    """Base params model.

    Subclasses set ``payload_key`` to the name the dashboard nests the
    entity under (``params.trigger``, ``params.command``, ...). The nested
    object, or ``params.data`` / ``params.updates``, is merged over the flat
    params so both request styles validate the same way.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    payload_key: ClassVar[str | None] = None

    guild_id: str | None = Field(
        default=None, validation_alias=AliasChoices("guildId", "guild_id")
    )

    @model_validator(mode="before")
    @classmethod
    def lift_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        for key in (cls.payload_key, "data", "updates"):
            if key and isinstance(data.get(key), dict):
                return {**data, **data[key]}
        return data

    @field_validator("guild_id", mode="before")
    @classmethod
    def normalize_guild(cls, value: Any) -> str | None:
        return normalize_guild_id(value)


@dataclass
class ActionContext:
    """Per-request state handed to every handler."""

    session: AsyncSession
    guild_id: str


Handler = Callable[[ActionContext, Any], Awaitable[Any]]


def describe_validation_error(error: ValidationError) -> str:
    """First validation problem as "field: message"."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "__root__")
    message = first.get("msg", "invalid value")
    return f"{field}: {message}" if field else message


@dataclass(frozen=True)
class RegisteredAction:
    name: ActionName
    params_model: type[ActionParams]
    handler: Handler

    def parse(self, raw: dict[str, Any] | None) -> ActionParams:
        """Validate raw params, raising InvalidParamsError on failure."""
        try:
            return self.params_model.model_validate(raw or {})
        except ValidationError as e:
            raise InvalidParamsError(describe_validation_error(e)) from e


class ActionRegistry:
    """ActionName -> RegisteredAction lookup."""

    def __init__(self) -> None:
        self._actions: dict[ActionName, RegisteredAction] = {}

    def action(
        self, name: ActionName, params_model: type[ActionParams] = ActionParams
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a handler under name."""

        def decorator(func: Handler) -> Handler:
            if name in self._actions:
                raise ValueError(f"Action {name.value} is already registered")
            self._actions[name] = RegisteredAction(name, params_model, func)
            return func

        return decorator

    def get(self, name: Any) -> RegisteredAction:
        """Look up an action by its wire name.

        Raises:
            UnknownActionError: name is not an ActionName or has no handler
        """
        try:
            key = ActionName(name)
        except ValueError:
            raise UnknownActionError(str(name)) from None

        action = self._actions.get(key)
        if action is None:
            raise UnknownActionError(key.value)
        return action

    def missing(self) -> list[ActionName]:
        """ActionNames without a registered handler."""
        return [name for name in ActionName if name not in self._actions]

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)


registry = ActionRegistry()
