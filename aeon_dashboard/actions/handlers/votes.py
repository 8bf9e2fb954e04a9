"""Poll handlers."""

from __future__ import annotations

from datetime import timedelta, timezone
from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import map_vote, map_vote_cast, tally_results
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import (
    CastVoteParams,
    CreateVoteParams,
    UUIDParams,
    VoteIdParams,
)
from aeon_dashboard.db.models import Vote, VoteCast
from aeon_dashboard.db.repositories import cast_vote, delete_in_guild, get_in_guild
from aeon_dashboard.errors import InvalidParamsError, NotFoundError
from aeon_dashboard.utils.time import utcnow


@registry.action(ActionName.GET_ACTIVE_VOTES)
async def get_active_votes(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    now = utcnow()
    result = await ctx.session.execute(
        select(Vote)
        .where(
            Vote.guild_id == ctx.guild_id,
            Vote.is_active.is_(True),
            Vote.end_time > now,
        )
        .order_by(Vote.created_at.desc())
    )
    return [map_vote(v, now) for v in result.scalars().all()]


@registry.action(ActionName.GET_ALL_VOTES)
async def get_all_votes(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    now = utcnow()
    result = await ctx.session.execute(
        select(Vote).where(Vote.guild_id == ctx.guild_id).order_by(Vote.created_at.desc())
    )
    return [map_vote(v, now) for v in result.scalars().all()]


@registry.action(ActionName.CREATE_VOTE, CreateVoteParams)
async def create_vote(ctx: ActionContext, params: CreateVoteParams) -> dict[str, Any]:
    now = utcnow()
    if params.end_time is not None:
        end_time = params.end_time
        if end_time.tzinfo is None:
            end_time = end_time.replace(tzinfo=timezone.utc)
        if end_time <= now:
            raise InvalidParamsError("end_time must be in the future")
    else:
        end_time = now + timedelta(hours=params.duration_hours)

    vote = Vote(
        guild_id=ctx.guild_id,
        question=params.question,
        description=params.description,
        options=[{"text": text, "votes": 0} for text in params.options],
        created_by=params.created_by,
        channel_id=params.channel_id,
        start_time=now,
        end_time=end_time,
        is_active=True,
        results_posted=False,
        total_votes=0,
    )
    ctx.session.add(vote)
    await ctx.session.flush()
    return map_vote(vote, now)


@registry.action(ActionName.DELETE_VOTE, UUIDParams)
async def delete_vote(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, Vote, params.id, ctx.guild_id):
        raise NotFoundError("Vote not found")
    return {"success": True}


@registry.action(ActionName.CAST_VOTE, CastVoteParams)
async def cast(ctx: ActionContext, params: CastVoteParams) -> dict[str, Any]:
    ballot = await cast_vote(
        ctx.session, ctx.guild_id, params.vote_id, params.user_id, params.option_index
    )
    return map_vote_cast(ballot)


@registry.action(ActionName.GET_VOTE_RESULTS, VoteIdParams)
async def get_vote_results(ctx: ActionContext, params: VoteIdParams) -> dict[str, Any]:
    vote = await get_in_guild(ctx.session, Vote, params.vote_id, ctx.guild_id)
    if vote is None:
        raise NotFoundError("Vote not found")

    result = await ctx.session.execute(
        select(VoteCast).where(VoteCast.vote_id == vote.id)
    )
    return tally_results(vote, result.scalars().all())
