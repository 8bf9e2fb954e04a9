"""Audit log row to dashboard record mapper."""

from __future__ import annotations

from typing import Any, Literal

from aeon_dashboard.db.models import AuditLog

Severity = Literal["info", "warning", "error", "success"]

# action_type -> severity. Anything not listed is "info".
SEVERITY_BY_ACTION: dict[str, Severity] = {
    "ban": "error",
    "kick": "error",
    "delete": "error",
    "hard_delete": "error",
    "warn": "warning",
    "mute": "warning",
    "timeout": "warning",
    "unban": "success",
    "unmute": "success",
    "resolved": "success",
    "approve": "success",
}


def severity_from_action(action_type: Any) -> Severity:
    """Classify an audit action type by exact name. Total: unknown or non-string input is info."""
    if not isinstance(action_type, str):
        return "info"
    return SEVERITY_BY_ACTION.get(action_type, "info")


def map_audit_log(log: AuditLog) -> dict[str, Any]:
    """Convert an AuditLog row to the record the audit page renders."""
    return {
        "id": str(log.id),
        "guild_id": log.guild_id,
        "action": log.action_type,
        "username": log.moderator_id or log.user_id or "system",
        "user_id": log.user_id,
        "moderator_id": log.moderator_id,
        "channel_id": log.channel_id,
        "details": log.reason or "",
        "bot_action": bool(log.bot_action),
        "severity": severity_from_action(log.action_type),
        "created_at": log.created_at,
    }


def matches_search(record: dict[str, Any], search: str) -> bool:
    """Case-insensitive substring match over action, username and details."""
    if not search:
        return True
    needle = search.lower()
    return any(
        needle in str(record.get(key) or "").lower()
        for key in ("action", "username", "details")
    )
