"""Embed (message template) mappers.

Stored embeds are a JSON blob; ``map_embed`` flattens it back into the
form fields the embed editor posts.
"""

from __future__ import annotations

from typing import Any

from aeon_dashboard.db.models import MessageTemplate
from aeon_dashboard.utils.json import as_dict, as_list, compact_json

DEFAULT_EMBED_COLOR = "#6366f1"


def build_embed_data(embed: dict[str, Any]) -> dict[str, Any]:
    """Build the stored embed_data blob from dashboard form input."""
    return compact_json(
        {
            "title": embed.get("title"),
            "description": embed.get("description") or "",
            "color": embed.get("color") or DEFAULT_EMBED_COLOR,
            "footer": embed.get("footer") or "",
            "thumbnail": embed.get("thumbnail_url") or None,
            "image": embed.get("image_url") or None,
            "fields": as_list(embed.get("fields")),
            "creator": embed.get("created_by") or None,
        }
    )


def _footer_text(value: Any) -> str:
    # Discord's own shape is {"text": ..., "icon_url": ...}
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return str(value.get("text") or "")
    return ""


def map_embed(template: MessageTemplate) -> dict[str, Any]:
    """Convert a MessageTemplate row to the flat record the embed editor uses."""
    data = as_dict(template.embed_data)
    return {
        "id": str(template.id),
        "guild_id": template.guild_id,
        "name": template.name,
        "title": data.get("title") or template.name,
        "description": data.get("description") or "",
        "color": data.get("color") or DEFAULT_EMBED_COLOR,
        "footer": _footer_text(data.get("footer")),
        "thumbnail_url": data.get("thumbnail"),
        "image_url": data.get("image"),
        "fields": as_list(data.get("fields")),
        "created_by": data.get("creator") or template.created_by or "dashboard_admin",
        "created_at": template.created_at,
        "updated_at": template.updated_at,
    }
