"""Ticket and ticket panel mappers."""

from __future__ import annotations

from typing import Any

from aeon_dashboard.db.models import Ticket, TicketPanel

# Statuses written by older bot versions
_LEGACY_STATUS = {
    "claimed": "in_progress",
    "deleted": "closed",
}


def normalize_ticket_status(status: str | None) -> str:
    """Map any stored status onto open | in_progress | resolved | closed."""
    value = (status or "").strip().lower()
    value = _LEGACY_STATUS.get(value, value)
    if value in ("in_progress", "resolved", "closed"):
        return value
    return "open"


def status_filter_values(status: str) -> list[str]:
    """Stored status values that display as the given status."""
    values = [status]
    values.extend(legacy for legacy, current in _LEGACY_STATUS.items() if current == status)
    return values


def map_ticket(ticket: Ticket, panel_name: str | None = None) -> dict[str, Any]:
    """Convert a Ticket row to the record the tickets page renders.

    Args:
        ticket: Ticket row
        panel_name: Name of the panel it was opened from, if known
    """
    panel = panel_name or "general"
    return {
        "id": str(ticket.id),
        "guild_id": ticket.guild_id,
        "panel_id": str(ticket.panel_id) if ticket.panel_id else None,
        "title": ticket.title or f"{panel} Ticket",
        "user_id": ticket.user_id,
        "username": ticket.username or ticket.user_id,
        "channel_id": ticket.channel_id,
        "status": normalize_ticket_status(ticket.status),
        "priority": ticket.priority or "medium",
        "category": ticket.category or panel.lower(),
        "claimed_by": ticket.assigned_to,
        "messages_count": ticket.messages_count or 0,
        "created_at": ticket.opened_at,
        "updated_at": ticket.closed_at or ticket.claimed_at or ticket.opened_at,
        "closed_at": ticket.closed_at,
    }


def map_ticket_panel(panel: TicketPanel) -> dict[str, Any]:
    return {
        "id": str(panel.id),
        "guild_id": panel.guild_id,
        "name": panel.name,
        "channel_id": panel.channel_id or "",
        "category_id": panel.category_id,
        "message": panel.message or "",
        "button_label": panel.button_label,
        "button_color": panel.button_color or "primary",
        "created_by": panel.created_by,
        "created_at": panel.created_at,
    }
