"""Custom commands, triggers and auto responders.

A custom command trigger is unique within its guild. The check here gives
a readable error; the (guild_id, trigger) constraint still catches races.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import map_auto_responder, map_custom_command, map_trigger
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import (
    AutoResponderParams,
    CustomCommandParams,
    TriggerParams,
    UpdateAutoResponderParams,
    UpdateCustomCommandParams,
    UpdateTriggerParams,
    UUIDParams,
    check_pattern,
)
from aeon_dashboard.db.models import AutoResponder, CustomCommand, Trigger
from aeon_dashboard.db.repositories import delete_in_guild, get_in_guild
from aeon_dashboard.errors import ConflictError, InvalidParamsError, NotFoundError


async def _ensure_trigger_free(
    ctx: ActionContext, trigger: str, exclude_id: uuid.UUID | None = None
) -> None:
    stmt = select(CustomCommand.id).where(
        CustomCommand.guild_id == ctx.guild_id, CustomCommand.trigger == trigger
    )
    if exclude_id is not None:
        stmt = stmt.where(CustomCommand.id != exclude_id)
    result = await ctx.session.execute(stmt)
    if result.scalar_one_or_none() is not None:
        raise ConflictError(f'A command with trigger "{trigger}" already exists')


def _recheck_pattern(trigger_text: str, match_type: str) -> None:
    try:
        check_pattern(trigger_text, match_type)
    except ValueError as e:
        raise InvalidParamsError(str(e)) from e


# ---------------------------------------------------------------------------
# Custom commands
# ---------------------------------------------------------------------------


@registry.action(ActionName.GET_CUSTOM_COMMANDS)
async def get_custom_commands(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(CustomCommand)
        .where(CustomCommand.guild_id == ctx.guild_id)
        .order_by(CustomCommand.created_at.desc())
    )
    return [map_custom_command(c) for c in result.scalars().all()]


@registry.action(ActionName.CREATE_CUSTOM_COMMAND, CustomCommandParams)
async def create_custom_command(
    ctx: ActionContext, params: CustomCommandParams
) -> dict[str, Any]:
    await _ensure_trigger_free(ctx, params.trigger)

    command = CustomCommand(
        guild_id=ctx.guild_id,
        trigger=params.trigger,
        name=params.name or params.trigger,
        description=params.description,
        response=params.response,
        response_type=params.response_type,
        permission_level=params.permission_level,
        cooldown_seconds=params.cooldown_seconds,
        is_tag=params.is_tag,
        is_enabled=params.is_enabled,
        usage_count=0,
        created_by=params.created_by,
    )
    ctx.session.add(command)
    await ctx.session.flush()
    return map_custom_command(command)


@registry.action(ActionName.UPDATE_CUSTOM_COMMAND, UpdateCustomCommandParams)
async def update_custom_command(
    ctx: ActionContext, params: UpdateCustomCommandParams
) -> dict[str, Any]:
    command = await get_in_guild(ctx.session, CustomCommand, params.id, ctx.guild_id)
    if command is None:
        raise NotFoundError("Command not found")

    changes = params.changes()
    if "trigger" in changes and changes["trigger"] != command.trigger:
        await _ensure_trigger_free(ctx, changes["trigger"], exclude_id=command.id)

    for key, value in changes.items():
        setattr(command, key, value)
    await ctx.session.flush()
    return map_custom_command(command)


@registry.action(ActionName.DELETE_CUSTOM_COMMAND, UUIDParams)
async def delete_custom_command(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, CustomCommand, params.id, ctx.guild_id):
        raise NotFoundError("Command not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------------


@registry.action(ActionName.GET_TRIGGERS)
async def get_triggers(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(Trigger)
        .where(Trigger.guild_id == ctx.guild_id)
        .order_by(Trigger.created_at.desc())
    )
    return [map_trigger(t) for t in result.scalars().all()]


@registry.action(ActionName.CREATE_TRIGGER, TriggerParams)
async def create_trigger(ctx: ActionContext, params: TriggerParams) -> dict[str, Any]:
    trigger = Trigger(
        guild_id=ctx.guild_id,
        trigger_text=params.trigger_text,
        response=params.response,
        match_type=params.match_type,
        enabled=params.is_enabled,
        use_count=0,
        created_by=params.created_by,
    )
    ctx.session.add(trigger)
    await ctx.session.flush()
    return map_trigger(trigger)


@registry.action(ActionName.UPDATE_TRIGGER, UpdateTriggerParams)
async def update_trigger(ctx: ActionContext, params: UpdateTriggerParams) -> dict[str, Any]:
    trigger = await get_in_guild(ctx.session, Trigger, params.id, ctx.guild_id)
    if trigger is None:
        raise NotFoundError("Trigger not found")

    if params.trigger_text is not None:
        trigger.trigger_text = params.trigger_text
    if params.response is not None:
        trigger.response = params.response
    if params.match_type is not None:
        trigger.match_type = params.match_type
    if params.is_enabled is not None:
        trigger.enabled = params.is_enabled
    _recheck_pattern(trigger.trigger_text, trigger.match_type)

    await ctx.session.flush()
    return map_trigger(trigger)


@registry.action(ActionName.DELETE_TRIGGER, UUIDParams)
async def delete_trigger(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, Trigger, params.id, ctx.guild_id):
        raise NotFoundError("Trigger not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Auto responders
# ---------------------------------------------------------------------------


@registry.action(ActionName.GET_AUTO_RESPONDERS)
async def get_auto_responders(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(AutoResponder)
        .where(AutoResponder.guild_id == ctx.guild_id)
        .order_by(AutoResponder.created_at.desc())
    )
    return [map_auto_responder(r) for r in result.scalars().all()]


@registry.action(ActionName.CREATE_AUTO_RESPONDER, AutoResponderParams)
async def create_auto_responder(
    ctx: ActionContext, params: AutoResponderParams
) -> dict[str, Any]:
    responder = AutoResponder(
        guild_id=ctx.guild_id,
        trigger_text=params.trigger_text,
        match_type=params.match_type,
        response=params.response,
        response_type=params.response_type,
        is_enabled=params.is_enabled,
        trigger_count=0,
        created_by=params.created_by,
    )
    ctx.session.add(responder)
    await ctx.session.flush()
    return map_auto_responder(responder)


@registry.action(ActionName.UPDATE_AUTO_RESPONDER, UpdateAutoResponderParams)
async def update_auto_responder(
    ctx: ActionContext, params: UpdateAutoResponderParams
) -> dict[str, Any]:
    responder = await get_in_guild(ctx.session, AutoResponder, params.id, ctx.guild_id)
    if responder is None:
        raise NotFoundError("Auto responder not found")

    for key, value in params.model_dump(exclude={"id", "guild_id"}, exclude_none=True).items():
        setattr(responder, key, value)
    _recheck_pattern(responder.trigger_text, responder.match_type)

    await ctx.session.flush()
    return map_auto_responder(responder)


@registry.action(ActionName.DELETE_AUTO_RESPONDER, UUIDParams)
async def delete_auto_responder(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, AutoResponder, params.id, ctx.guild_id):
        raise NotFoundError("Auto responder not found")
    return {"success": True}
