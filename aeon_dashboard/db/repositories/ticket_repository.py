"""Ticket repository for multi-statement ticket operations."""

from __future__ import annotations

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from aeon_dashboard.db.models import Ticket, TicketPanel


async def delete_panel_with_tickets(
    session: AsyncSession, guild_id: str, panel_id: uuid.UUID
) -> int | None:
    """Delete a ticket panel and every ticket opened through it.

    Tickets are deleted first; the schema has no ON DELETE CASCADE on
    tickets.panel_id, so the panel delete would otherwise fail.

    Args:
        session: Database session
        guild_id: Resolved guild id the panel must belong to
        panel_id: Panel to delete

    Returns:
        Number of tickets removed, or None if the panel does not exist
        in this guild
    """
    found = await session.execute(
        select(TicketPanel.id).where(
            TicketPanel.id == panel_id, TicketPanel.guild_id == guild_id
        )
    )
    if found.scalar_one_or_none() is None:
        return None

    tickets_result = await session.execute(
        delete(Ticket).where(Ticket.panel_id == panel_id)
    )
    await session.execute(
        delete(TicketPanel).where(
            TicketPanel.id == panel_id, TicketPanel.guild_id == guild_id
        )
    )
    return tickets_result.rowcount or 0
