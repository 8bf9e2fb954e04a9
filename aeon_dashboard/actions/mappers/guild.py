"""Mappers for the remaining guild-scoped rows: members, info topics, roles."""

from __future__ import annotations

from typing import Any

from aeon_dashboard.db.models import ButtonRole, InfoTopic, Member, ReactionRole


def map_member(member: Member) -> dict[str, Any]:
    return {
        "id": str(member.id),
        "guild_id": member.guild_id,
        "user_id": member.user_id,
        "username": member.username or member.user_id,
        "discriminator": member.discriminator,
        "avatar_url": member.avatar_url,
        "joined_at": member.joined_at,
        "last_active": member.last_active,
        "message_count": member.message_count or 0,
        "vote_count": member.vote_count or 0,
        "xp": member.xp or 0,
        "level": member.level or 0,
        "role_ids": member.role_ids or [],
    }


def map_info_topic(topic: InfoTopic) -> dict[str, Any]:
    return {
        "id": topic.id,
        "guild_id": topic.guild_id,
        "section": topic.section,
        "subcategory": topic.subcategory,
        "topic_id": topic.topic_id,
        "name": topic.name,
        "embed_title": topic.embed_title or topic.name,
        "embed_description": topic.embed_description,
        "embed_color": topic.embed_color,
        "emoji": topic.emoji,
        "category_emoji_id": topic.category_emoji_id,
        "image": topic.image,
        "thumbnail": topic.thumbnail,
        "footer": topic.footer,
        "views": topic.views or 0,
        "created_at": topic.created_at,
        "updated_at": topic.updated_at,
    }


def map_reaction_role(role: ReactionRole) -> dict[str, Any]:
    return {
        "id": str(role.id),
        "guild_id": role.guild_id,
        "message_id": role.message_id,
        "channel_id": role.channel_id,
        "emoji": role.emoji,
        "role_id": role.role_id,
        "role_name": role.role_name or role.role_id,
        "type": "reaction",
        "created_by": role.created_by,
        "created_at": role.created_at,
    }


def map_button_role(role: ButtonRole) -> dict[str, Any]:
    return {
        "id": str(role.id),
        "guild_id": role.guild_id,
        "message_id": role.message_id,
        "channel_id": role.channel_id,
        "button_id": role.button_id,
        "label": role.label,
        "emoji": role.emoji,
        "style": role.style,
        "role_id": role.role_id,
        "role_name": role.role_name or role.role_id,
        "type": "button",
        "created_by": role.created_by,
        "created_at": role.created_at,
    }
