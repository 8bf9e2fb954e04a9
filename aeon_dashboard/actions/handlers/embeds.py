"""Embed (message template) handlers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import build_embed_data, map_embed
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import CreateEmbedParams, UUIDParams
from aeon_dashboard.db.models import MessageTemplate
from aeon_dashboard.db.repositories import delete_in_guild
from aeon_dashboard.errors import NotFoundError


@registry.action(ActionName.GET_EMBEDS)
async def get_embeds(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(MessageTemplate)
        .where(MessageTemplate.guild_id == ctx.guild_id)
        .order_by(MessageTemplate.created_at.desc())
    )
    return [map_embed(t) for t in result.scalars().all()]


@registry.action(ActionName.CREATE_EMBED, CreateEmbedParams)
async def create_embed(ctx: ActionContext, params: CreateEmbedParams) -> dict[str, Any]:
    template = MessageTemplate(
        guild_id=ctx.guild_id,
        name=params.name,
        content=params.title,
        embed_data=build_embed_data(params.model_dump(exclude={"guild_id", "name"})),
        created_by=params.created_by,
    )
    ctx.session.add(template)
    await ctx.session.flush()
    return map_embed(template)


@registry.action(ActionName.DELETE_EMBED, UUIDParams)
async def delete_embed(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, MessageTemplate, params.id, ctx.guild_id):
        raise NotFoundError("Embed not found")
    return {"success": True}
