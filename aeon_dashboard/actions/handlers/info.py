"""Info topic handlers.

Topics are listed grouped for display: section, then subcategory, then name.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import map_info_topic
from aeon_dashboard.actions.registry import ActionContext, ActionName, registry
from aeon_dashboard.actions.schemas import (
    CreateInfoTopicParams,
    InfoTopicFilterParams,
    IntIdParams,
    UpdateInfoTopicParams,
)
from aeon_dashboard.db.models import InfoTopic
from aeon_dashboard.db.repositories import delete_in_guild, get_in_guild
from aeon_dashboard.errors import NotFoundError
from aeon_dashboard.utils.ids import slugify


@registry.action(ActionName.GET_INFO_TOPICS, InfoTopicFilterParams)
async def get_info_topics(
    ctx: ActionContext, params: InfoTopicFilterParams
) -> list[dict[str, Any]]:
    stmt = (
        select(InfoTopic)
        .where(InfoTopic.guild_id == ctx.guild_id)
        .order_by(InfoTopic.section, InfoTopic.subcategory, InfoTopic.name)
    )
    if params.section:
        stmt = stmt.where(InfoTopic.section == params.section)
    if params.subcategory:
        stmt = stmt.where(InfoTopic.subcategory == params.subcategory)

    result = await ctx.session.execute(stmt)
    return [map_info_topic(t) for t in result.scalars().all()]


@registry.action(ActionName.CREATE_INFO_TOPIC, CreateInfoTopicParams)
async def create_info_topic(
    ctx: ActionContext, params: CreateInfoTopicParams
) -> dict[str, Any]:
    values = params.model_dump(exclude={"guild_id", "topic_id"})
    topic = InfoTopic(
        guild_id=ctx.guild_id,
        topic_id=params.topic_id or slugify(params.name),
        views=0,
        **values,
    )
    ctx.session.add(topic)
    await ctx.session.flush()
    return map_info_topic(topic)


@registry.action(ActionName.UPDATE_INFO_TOPIC, UpdateInfoTopicParams)
async def update_info_topic(
    ctx: ActionContext, params: UpdateInfoTopicParams
) -> dict[str, Any]:
    topic = await get_in_guild(ctx.session, InfoTopic, params.id, ctx.guild_id)
    if topic is None:
        raise NotFoundError("Topic not found")

    for key, value in params.changes().items():
        setattr(topic, key, value)
    await ctx.session.flush()
    return map_info_topic(topic)


@registry.action(ActionName.DELETE_INFO_TOPIC, IntIdParams)
async def delete_info_topic(ctx: ActionContext, params: IntIdParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, InfoTopic, params.id, ctx.guild_id):
        raise NotFoundError("Topic not found")
    return {"success": True}
