"""Params models for dashboard actions.

Each create/update model names the key the dashboard nests its payload
under (``payload_key``); flat params validate the same way, see
``ActionParams.lift_payload``.

Numeric paging params are clamped into range instead of rejected, the same
way the dashboard has always treated them.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import Annotated, Any, ClassVar, Literal, Optional

from pydantic import AliasChoices, BeforeValidator, Field, StringConstraints
from pydantic import field_validator, model_validator

from aeon_dashboard.actions.registry import ActionParams
from aeon_dashboard.db.models import MATCH_TYPES
from aeon_dashboard.utils.ids import clamp, is_snowflake

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalStr = Optional[Annotated[str, StringConstraints(strip_whitespace=True)]]

MatchType = Literal["exact", "contains", "starts_with", "ends_with", "regex"]
WarnSeverity = Literal["low", "medium", "high"]
ResponseType = Literal["text", "embed"]


def bounded(fallback: int, low: int, high: int) -> Any:
    """int type that clamps into [low, high], using fallback when unparseable."""
    return Annotated[int, BeforeValidator(lambda v: clamp(v, fallback, low, high))]


RecentLimit = bounded(10, 1, 50)
AnalyticsDays = bounded(7, 1, 365)
ChannelLimit = bounded(5, 1, 25)
MemberLimit = bounded(200, 1, 500)
TopMemberLimit = bounded(10, 1, 100)
AuditLimit = bounded(50, 1, 250)
CooldownSeconds = bounded(3, 0, 86400)
RatelimitPerMinute = bounded(20, 1, 10000)


def check_pattern(trigger_text: str, match_type: str) -> None:
    """Raise ValueError if match_type is unknown or a regex does not compile."""
    if match_type not in MATCH_TYPES:
        raise ValueError(f"match_type must be one of {', '.join(MATCH_TYPES)}")
    if match_type == "regex":
        try:
            re.compile(trigger_text)
        except re.error as e:
            raise ValueError(f"trigger_text is not a valid regular expression: {e}") from e


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class UUIDParams(ActionParams):
    id: uuid.UUID


class IntIdParams(ActionParams):
    id: int


# ---------------------------------------------------------------------------
# Stats / members
# ---------------------------------------------------------------------------


class RecentActivityParams(ActionParams):
    limit: RecentLimit = 10


class ActivityAnalyticsParams(ActionParams):
    days: AnalyticsDays = 7


class TopChannelsParams(ActionParams):
    limit: ChannelLimit = 5


class MembersParams(ActionParams):
    limit: MemberLimit = 200


class TopMembersParams(ActionParams):
    limit: TopMemberLimit = 10


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class GuildSettingParams(ActionParams):
    payload_key: ClassVar[str] = "setting"

    prefix: NonEmptyStr = "!"
    use_slash_commands: bool = True
    moderation_enabled: bool = True
    levelling_enabled: bool = True
    fun_enabled: bool = True
    tickets_enabled: bool = True
    custom_commands_enabled: bool = True
    auto_responders_enabled: bool = True
    global_cooldown: int = Field(default=1000, ge=0)
    command_cooldown: dict[str, Any] | None = None

    def column_values(self) -> dict[str, Any]:
        return self.model_dump(exclude={"guild_id"})


class BotSettingsParams(ActionParams):
    payload_key: ClassVar[str] = "settings"

    prefix: NonEmptyStr = "!"
    slash_commands_enabled: bool = True
    modules: dict[str, bool] = Field(default_factory=dict)
    cooldown_seconds: CooldownSeconds = 3
    ratelimit_per_minute: RatelimitPerMinute = 20


# ---------------------------------------------------------------------------
# Custom commands
# ---------------------------------------------------------------------------


class CustomCommandParams(ActionParams):
    payload_key: ClassVar[str] = "command"

    trigger: OptionalStr = None
    name: OptionalStr = None
    description: OptionalStr = None
    response: NonEmptyStr
    response_type: ResponseType = "text"
    permission_level: NonEmptyStr = "everyone"
    cooldown_seconds: int = Field(default=0, ge=0)
    is_tag: bool = False
    is_enabled: bool = True
    created_by: NonEmptyStr = "dashboard_admin"

    @model_validator(mode="after")
    def trigger_from_name(self) -> "CustomCommandParams":
        # The commands page only has a "name" box; it doubles as the trigger
        if not self.trigger:
            self.trigger = self.name
        if not self.trigger:
            raise ValueError("Command name/trigger is required")
        return self


class UpdateCustomCommandParams(ActionParams):
    payload_key: ClassVar[str] = "command"

    id: uuid.UUID
    trigger: NonEmptyStr | None = None
    name: OptionalStr = None
    description: OptionalStr = None
    response: NonEmptyStr | None = None
    response_type: ResponseType | None = None
    permission_level: NonEmptyStr | None = None
    cooldown_seconds: int | None = Field(default=None, ge=0)
    is_tag: bool | None = None
    is_enabled: bool | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude={"id", "guild_id"}, exclude_none=True)


# ---------------------------------------------------------------------------
# Triggers / auto responders
# ---------------------------------------------------------------------------


class TriggerParams(ActionParams):
    payload_key: ClassVar[str] = "trigger"

    trigger_text: NonEmptyStr
    response: NonEmptyStr
    match_type: MatchType = "contains"
    is_enabled: bool = Field(default=True, validation_alias=_alias("is_enabled", "enabled"))
    created_by: NonEmptyStr = "dashboard_admin"

    @model_validator(mode="after")
    def pattern_compiles(self) -> "TriggerParams":
        check_pattern(self.trigger_text, self.match_type)
        return self


class UpdateTriggerParams(ActionParams):
    payload_key: ClassVar[str] = "trigger"

    id: uuid.UUID
    trigger_text: NonEmptyStr | None = None
    response: NonEmptyStr | None = None
    match_type: MatchType | None = None
    is_enabled: bool | None = Field(
        default=None, validation_alias=_alias("is_enabled", "enabled")
    )


class AutoResponderParams(ActionParams):
    payload_key: ClassVar[str] = "responder"

    trigger_text: NonEmptyStr
    response: NonEmptyStr
    match_type: MatchType = "contains"
    response_type: ResponseType = "text"
    is_enabled: bool = True
    created_by: NonEmptyStr = "dashboard"

    @model_validator(mode="after")
    def pattern_compiles(self) -> "AutoResponderParams":
        check_pattern(self.trigger_text, self.match_type)
        return self


class UpdateAutoResponderParams(ActionParams):
    payload_key: ClassVar[str] = "responder"

    id: uuid.UUID
    trigger_text: NonEmptyStr | None = None
    response: NonEmptyStr | None = None
    match_type: MatchType | None = None
    response_type: ResponseType | None = None
    is_enabled: bool | None = None


# ---------------------------------------------------------------------------
# Tickets
# ---------------------------------------------------------------------------


class TicketFilterParams(ActionParams):
    status: OptionalStr = None
    priority: OptionalStr = None


class ClaimTicketParams(ActionParams):
    id: uuid.UUID
    user_id: NonEmptyStr = Field(validation_alias=_alias("user_id", "userId"))


class TicketPanelParams(ActionParams):
    payload_key: ClassVar[str] = "panel"

    name: NonEmptyStr
    channel_id: NonEmptyStr = Field(validation_alias=_alias("channel_id", "channelId"))
    category_id: OptionalStr = None
    message: OptionalStr = None
    button_label: NonEmptyStr = "Open Ticket"
    button_color: NonEmptyStr = "primary"
    created_by: NonEmptyStr = "dashboard_admin"


# ---------------------------------------------------------------------------
# Audit / moderation
# ---------------------------------------------------------------------------


class AuditLogParams(ActionParams):
    severity: OptionalStr = None
    search: OptionalStr = None
    limit: AuditLimit = 50


class WarnFilterParams(ActionParams):
    user_id: OptionalStr = Field(default=None, validation_alias=_alias("user_id", "userId"))
    severity: OptionalStr = None


class CreateWarnParams(ActionParams):
    payload_key: ClassVar[str] = "warn"

    user_id: NonEmptyStr
    moderator_id: NonEmptyStr
    reason: OptionalStr = None
    severity: WarnSeverity = "medium"


class DeleteWarnParams(ActionParams):
    record_id: int = Field(validation_alias=_alias("record_id", "id"))

    @field_validator("record_id", mode="before")
    @classmethod
    def from_flat_id(cls, value: Any) -> Any:
        # Flattened warnings carry "<record_id>-<timestamp>"
        if isinstance(value, str):
            return value.split("-", 1)[0]
        return value


class CreateBlacklistParams(ActionParams):
    payload_key: ClassVar[str] = "blacklist"

    user_id: NonEmptyStr
    reason: OptionalStr = None
    created_by: NonEmptyStr = "dashboard_admin"


class ScanFilterParams(ActionParams):
    user_id: OptionalStr = Field(default=None, validation_alias=_alias("user_id", "userId"))
    severity: OptionalStr = None
    detected_type: OptionalStr = None


class CreateScanParams(ActionParams):
    payload_key: ClassVar[str] = "scan"

    user_id: NonEmptyStr
    detected_type: NonEmptyStr
    message_content: OptionalStr = None
    severity: WarnSeverity = "medium"


# ---------------------------------------------------------------------------
# Votes
# ---------------------------------------------------------------------------


class CreateVoteParams(ActionParams):
    payload_key: ClassVar[str] = "vote"

    question: NonEmptyStr
    description: OptionalStr = None
    options: list[NonEmptyStr] = Field(min_length=1)
    channel_id: OptionalStr = Field(
        default=None, validation_alias=_alias("channel_id", "channelId")
    )
    end_time: datetime | None = Field(
        default=None, validation_alias=_alias("end_time", "endTime")
    )
    duration_hours: int = Field(default=24, ge=1, le=24 * 90)
    created_by: NonEmptyStr = "dashboard_admin"

    @field_validator("options", mode="before")
    @classmethod
    def option_texts(cls, value: Any) -> Any:
        # Accept ["a", "b"] as well as [{"text": "a"}, ...]
        if isinstance(value, list):
            return [item.get("text") if isinstance(item, dict) else item for item in value]
        return value

    @field_validator("channel_id")
    @classmethod
    def channel_is_snowflake(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not is_snowflake(value):
            raise ValueError("channel_id must be a 17-19 digit Discord id")
        return value


class VoteIdParams(ActionParams):
    vote_id: uuid.UUID = Field(validation_alias=_alias("vote_id", "voteId", "id"))


class CastVoteParams(ActionParams):
    payload_key: ClassVar[str] = "vote_cast"

    vote_id: uuid.UUID = Field(validation_alias=_alias("vote_id", "voteId"))
    user_id: NonEmptyStr = Field(validation_alias=_alias("user_id", "userId"))
    option_index: int = Field(ge=0, validation_alias=_alias("option_index", "optionIndex"))


# ---------------------------------------------------------------------------
# Embeds
# ---------------------------------------------------------------------------


class CreateEmbedParams(ActionParams):
    payload_key: ClassVar[str] = "embed"

    name: NonEmptyStr
    title: NonEmptyStr
    description: OptionalStr = None
    color: OptionalStr = None
    footer: OptionalStr = None
    thumbnail_url: OptionalStr = None
    image_url: OptionalStr = None
    fields: list[dict[str, Any]] = Field(default_factory=list)
    created_by: NonEmptyStr = "dashboard_admin"


# ---------------------------------------------------------------------------
# Info topics
# ---------------------------------------------------------------------------


class InfoTopicFilterParams(ActionParams):
    section: OptionalStr = None
    subcategory: OptionalStr = None


class CreateInfoTopicParams(ActionParams):
    payload_key: ClassVar[str] = "topic"

    section: NonEmptyStr
    name: NonEmptyStr = Field(validation_alias=_alias("name", "title"))
    embed_description: NonEmptyStr = Field(
        validation_alias=_alias("embed_description", "content")
    )
    subcategory: NonEmptyStr = "General"
    topic_id: OptionalStr = None
    embed_title: OptionalStr = None
    embed_color: NonEmptyStr = "#5865F2"
    emoji: NonEmptyStr = "📄"
    category_emoji_id: OptionalStr = None
    image: OptionalStr = None
    thumbnail: OptionalStr = None
    footer: OptionalStr = None


class UpdateInfoTopicParams(ActionParams):
    payload_key: ClassVar[str] = "topic"

    id: int
    section: NonEmptyStr | None = None
    name: NonEmptyStr | None = Field(default=None, validation_alias=_alias("name", "title"))
    embed_description: NonEmptyStr | None = Field(
        default=None, validation_alias=_alias("embed_description", "content")
    )
    subcategory: NonEmptyStr | None = None
    embed_title: OptionalStr = None
    embed_color: NonEmptyStr | None = None
    emoji: NonEmptyStr | None = None
    category_emoji_id: OptionalStr = None
    image: OptionalStr = None
    thumbnail: OptionalStr = None
    footer: OptionalStr = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude={"id", "guild_id"}, exclude_none=True)


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


class ReactionRoleParams(ActionParams):
    payload_key: ClassVar[str] = "role"

    message_id: NonEmptyStr
    channel_id: NonEmptyStr
    emoji: NonEmptyStr
    role_id: NonEmptyStr
    role_name: OptionalStr = None
    created_by: NonEmptyStr = "dashboard_admin"


class ButtonRoleParams(ActionParams):
    payload_key: ClassVar[str] = "role"

    message_id: NonEmptyStr
    channel_id: NonEmptyStr
    button_id: NonEmptyStr
    role_id: NonEmptyStr
    label: OptionalStr = None
    emoji: OptionalStr = None
    style: Literal["primary", "secondary", "success", "danger"] = "primary"
    role_name: OptionalStr = None
    created_by: NonEmptyStr = "dashboard_admin"
