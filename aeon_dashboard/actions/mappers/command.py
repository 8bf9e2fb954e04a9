"""Custom command, trigger and auto-responder mappers."""

from __future__ import annotations

from typing import Any

from aeon_dashboard.db.models import AutoResponder, CustomCommand, Trigger


def map_custom_command(command: CustomCommand) -> dict[str, Any]:
    return {
        "id": str(command.id),
        "guild_id": command.guild_id,
        "trigger": command.trigger,
        "name": command.name or command.trigger,
        "description": command.description or "",
        "response": command.response,
        "response_type": command.response_type,
        "permission_level": command.permission_level or "everyone",
        "is_enabled": command.is_enabled,
        "is_tag": command.is_tag,
        "cooldown_seconds": command.cooldown_seconds or 0,
        "use_count": command.usage_count or 0,
        "created_by": command.created_by,
        "created_at": command.created_at,
        "updated_at": command.updated_at,
    }


def map_trigger(trigger: Trigger) -> dict[str, Any]:
    return {
        "id": str(trigger.id),
        "guild_id": trigger.guild_id,
        "trigger_text": trigger.trigger_text,
        "response": trigger.response,
        "match_type": trigger.match_type,
        "is_enabled": trigger.enabled,
        "trigger_count": trigger.use_count or 0,
        "created_by": trigger.created_by,
        "created_at": trigger.created_at,
        "updated_at": trigger.updated_at,
    }


def map_auto_responder(responder: AutoResponder) -> dict[str, Any]:
    return {
        "id": str(responder.id),
        "guild_id": responder.guild_id,
        "trigger_text": responder.trigger_text,
        "match_type": responder.match_type,
        "response": responder.response,
        "response_type": responder.response_type,
        "is_enabled": responder.is_enabled,
        "trigger_count": responder.trigger_count or 0,
        "created_by": responder.created_by,
        "created_at": responder.created_at,
        "updated_at": responder.updated_at,
    }
