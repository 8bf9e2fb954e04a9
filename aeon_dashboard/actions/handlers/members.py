"""Member list and leaderboard. Members are written by the bot only."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import map_member
from aeon_dashboard.actions.registry import ActionContext, ActionName, registry
from aeon_dashboard.actions.schemas import MembersParams, TopMembersParams
from aeon_dashboard.db.models import Member


@registry.action(ActionName.GET_MEMBERS, MembersParams)
async def get_members(ctx: ActionContext, params: MembersParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(Member)
        .where(Member.guild_id == ctx.guild_id)
        .order_by(Member.xp.desc())
        .limit(params.limit)
    )
    return [map_member(m) for m in result.scalars().all()]


@registry.action(ActionName.GET_TOP_MEMBERS, TopMembersParams)
async def get_top_members(
    ctx: ActionContext, params: TopMembersParams
) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(Member)
        .where(Member.guild_id == ctx.guild_id)
        .order_by(
            Member.message_count.desc(),
            Member.vote_count.desc(),
            Member.last_active.desc(),
        )
        .limit(params.limit)
    )
    return [map_member(m) for m in result.scalars().all()]
