"""Reaction role and button role handlers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import map_button_role, map_reaction_role
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import ButtonRoleParams, ReactionRoleParams, UUIDParams
from aeon_dashboard.db.models import ButtonRole, ReactionRole
from aeon_dashboard.db.repositories import delete_in_guild
from aeon_dashboard.errors import NotFoundError


@registry.action(ActionName.GET_REACTION_ROLES)
async def get_reaction_roles(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(ReactionRole)
        .where(ReactionRole.guild_id == ctx.guild_id)
        .order_by(ReactionRole.created_at.desc())
    )
    return [map_reaction_role(r) for r in result.scalars().all()]


@registry.action(ActionName.CREATE_REACTION_ROLE, ReactionRoleParams)
async def create_reaction_role(ctx: ActionContext, params: ReactionRoleParams) -> dict[str, Any]:
    role = ReactionRole(guild_id=ctx.guild_id, **params.model_dump(exclude={"guild_id"}))
    ctx.session.add(role)
    await ctx.session.flush()
    return map_reaction_role(role)


@registry.action(ActionName.DELETE_REACTION_ROLE, UUIDParams)
async def delete_reaction_role(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, ReactionRole, params.id, ctx.guild_id):
        raise NotFoundError("Reaction role not found")
    return {"success": True}


@registry.action(ActionName.GET_BUTTON_ROLES)
async def get_button_roles(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(ButtonRole)
        .where(ButtonRole.guild_id == ctx.guild_id)
        .order_by(ButtonRole.created_at.desc())
    )
    return [map_button_role(r) for r in result.scalars().all()]


@registry.action(ActionName.CREATE_BUTTON_ROLE, ButtonRoleParams)
async def create_button_role(ctx: ActionContext, params: ButtonRoleParams) -> dict[str, Any]:
    role = ButtonRole(guild_id=ctx.guild_id, **params.model_dump(exclude={"guild_id"}))
    ctx.session.add(role)
    await ctx.session.flush()
    return map_button_role(role)


@registry.action(ActionName.DELETE_BUTTON_ROLE, UUIDParams)
async def delete_button_role(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, ButtonRole, params.id, ctx.guild_id):
        raise NotFoundError("Button role not found")
    return {"success": True}
