"""Overview page statistics.

getDashboardStats counts each table on its own savepoint: a table the bot
has not created yet counts as 0 instead of failing the whole page.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from aeon_dashboard.actions.mappers import map_audit_log
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import (
    ActivityAnalyticsParams,
    RecentActivityParams,
    TopChannelsParams,
)
from aeon_dashboard.db.models import (
    AuditLog,
    AutoResponder,
    CustomCommand,
    InfoTopic,
    Member,
    Ticket,
    Trigger,
    Vote,
    WarnRecord,
)
from aeon_dashboard.utils.time import utcnow

logger = logging.getLogger(__name__)

# result key -> (model, aggregate)
DASHBOARD_COUNTS = {
    "memberCount": (Member, func.count()),
    "commandCount": (CustomCommand, func.count()),
    "ticketCount": (Ticket, func.count()),
    "auditCount": (AuditLog, func.count()),
    "triggerCount": (Trigger, func.count()),
    "autoRespCount": (AutoResponder, func.count()),
    "voteCount": (Vote, func.count()),
    "topicCount": (InfoTopic, func.count()),
    "warnCount": (
        WarnRecord,
        func.coalesce(func.sum(func.jsonb_array_length(WarnRecord.warns)), 0),
    ),
}


async def _count_or_zero(ctx: ActionContext, model: Any, aggregate: Any) -> int:
    try:
        async with ctx.session.begin_nested():
            result = await ctx.session.execute(
                select(aggregate).select_from(model).where(model.guild_id == ctx.guild_id)
            )
            return int(result.scalar_one() or 0)
    except SQLAlchemyError as e:
        logger.debug(f"{model.__tablename__} not countable, using 0: {e}")
        return 0


@registry.action(ActionName.GET_DASHBOARD_STATS)
async def get_dashboard_stats(ctx: ActionContext, params: ActionParams) -> dict[str, int]:
    stats: dict[str, int] = {}
    for key, (model, aggregate) in DASHBOARD_COUNTS.items():
        stats[key] = await _count_or_zero(ctx, model, aggregate)
    return stats


@registry.action(ActionName.GET_GUILD_STATS)
async def get_guild_stats(ctx: ActionContext, params: ActionParams) -> dict[str, int]:
    session, guild_id = ctx.session, ctx.guild_id
    now = utcnow()

    members = await session.execute(
        select(func.count(), func.coalesce(func.sum(Member.message_count), 0)).where(
            Member.guild_id == guild_id
        )
    )
    total_members, total_messages = members.one()

    active_votes = await session.execute(
        select(func.count()).select_from(Vote).where(
            Vote.guild_id == guild_id,
            Vote.is_active.is_(True),
            Vote.end_time > now,
        )
    )
    weekly = await session.execute(
        select(func.count()).select_from(AuditLog).where(
            AuditLog.guild_id == guild_id,
            AuditLog.created_at >= now - timedelta(days=7),
        )
    )

    return {
        "totalMembers": int(total_members or 0),
        "activeVotes": int(active_votes.scalar_one() or 0),
        "totalMessages": int(total_messages or 0),
        "weeklyActivity": int(weekly.scalar_one() or 0),
    }


@registry.action(ActionName.GET_RECENT_ACTIVITY, RecentActivityParams)
async def get_recent_activity(
    ctx: ActionContext, params: RecentActivityParams
) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(AuditLog)
        .where(AuditLog.guild_id == ctx.guild_id)
        .order_by(AuditLog.created_at.desc())
        .limit(params.limit)
    )
    return [map_audit_log(log) for log in result.scalars().all()]


@registry.action(ActionName.GET_ACTIVITY_ANALYTICS, ActivityAnalyticsParams)
async def get_activity_analytics(
    ctx: ActionContext, params: ActivityAnalyticsParams
) -> list[dict[str, Any]]:
    since = utcnow() - timedelta(days=params.days)
    result = await ctx.session.execute(
        select(AuditLog.action_type, AuditLog.created_at)
        .where(AuditLog.guild_id == ctx.guild_id, AuditLog.created_at >= since)
        .order_by(AuditLog.created_at.asc())
    )
    return [dict(row) for row in result.mappings().all()]


@registry.action(ActionName.GET_TOP_CHANNELS, TopChannelsParams)
async def get_top_channels(
    ctx: ActionContext, params: TopChannelsParams
) -> list[dict[str, Any]]:
    message_count = func.count().label("message_count")
    result = await ctx.session.execute(
        select(AuditLog.channel_id, message_count)
        .where(
            AuditLog.guild_id == ctx.guild_id,
            AuditLog.action_type == "message",
            AuditLog.channel_id.is_not(None),
        )
        .group_by(AuditLog.channel_id)
        .order_by(message_count.desc())
        .limit(params.limit)
    )
    return [
        {"channel_id": row.channel_id, "message_count": int(row.message_count)}
        for row in result.all()
    ]
