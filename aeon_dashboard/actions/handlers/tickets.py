"""Ticket and ticket panel handlers.

Status only moves forward from the dashboard:
open -> in_progress (claim) -> resolved (close).
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from aeon_dashboard.actions.mappers import (
    map_ticket,
    map_ticket_panel,
    normalize_ticket_status,
    status_filter_values,
)
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import (
    ClaimTicketParams,
    TicketFilterParams,
    TicketPanelParams,
    UUIDParams,
)
from aeon_dashboard.db.models import Ticket, TicketPanel
from aeon_dashboard.db.repositories import delete_in_guild, delete_panel_with_tickets
from aeon_dashboard.errors import ConflictError, NotFoundError
from aeon_dashboard.utils.time import utcnow

CLAIMABLE = ("open", "in_progress")
FINISHED = ("resolved", "closed")


def _with_panel(ticket: Ticket) -> dict[str, Any]:
    return map_ticket(ticket, ticket.panel.name if ticket.panel else None)


async def _get_ticket(ctx: ActionContext, ticket_id: uuid.UUID) -> Ticket:
    result = await ctx.session.execute(
        select(Ticket)
        .options(selectinload(Ticket.panel))
        .where(Ticket.id == ticket_id, Ticket.guild_id == ctx.guild_id)
    )
    ticket = result.scalar_one_or_none()
    if ticket is None:
        raise NotFoundError("Ticket not found")
    return ticket


@registry.action(ActionName.GET_TICKETS, TicketFilterParams)
async def get_tickets(ctx: ActionContext, params: TicketFilterParams) -> list[dict[str, Any]]:
    stmt = (
        select(Ticket)
        .options(selectinload(Ticket.panel))
        .where(Ticket.guild_id == ctx.guild_id)
        .order_by(Ticket.opened_at.desc())
    )
    if params.status and params.status != "all":
        stmt = stmt.where(Ticket.status.in_(status_filter_values(params.status)))
    if params.priority and params.priority != "all":
        stmt = stmt.where(Ticket.priority == params.priority)

    result = await ctx.session.execute(stmt)
    return [_with_panel(t) for t in result.scalars().all()]


@registry.action(ActionName.CLAIM_TICKET, ClaimTicketParams)
async def claim_ticket(ctx: ActionContext, params: ClaimTicketParams) -> dict[str, Any]:
    ticket = await _get_ticket(ctx, params.id)
    status = normalize_ticket_status(ticket.status)
    if status not in CLAIMABLE:
        raise ConflictError(f"Ticket is already {status}")

    ticket.assigned_to = params.user_id
    ticket.status = "in_progress"
    ticket.claimed_at = utcnow()
    await ctx.session.flush()
    return _with_panel(ticket)


@registry.action(ActionName.CLOSE_TICKET, UUIDParams)
async def close_ticket(ctx: ActionContext, params: UUIDParams) -> dict[str, Any]:
    ticket = await _get_ticket(ctx, params.id)
    status = normalize_ticket_status(ticket.status)
    if status in FINISHED:
        raise ConflictError(f"Ticket is already {status}")

    ticket.status = "resolved"
    ticket.closed_at = utcnow()
    await ctx.session.flush()
    return _with_panel(ticket)


@registry.action(ActionName.DELETE_TICKET, UUIDParams)
async def delete_ticket(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, Ticket, params.id, ctx.guild_id):
        raise NotFoundError("Ticket not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Panels
# ---------------------------------------------------------------------------


@registry.action(ActionName.GET_TICKET_PANELS)
async def get_ticket_panels(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(TicketPanel)
        .where(TicketPanel.guild_id == ctx.guild_id)
        .order_by(TicketPanel.created_at.desc())
    )
    return [map_ticket_panel(p) for p in result.scalars().all()]


@registry.action(ActionName.CREATE_TICKET_PANEL, TicketPanelParams)
async def create_ticket_panel(ctx: ActionContext, params: TicketPanelParams) -> dict[str, Any]:
    panel = TicketPanel(
        guild_id=ctx.guild_id,
        name=params.name,
        channel_id=params.channel_id,
        category_id=params.category_id,
        message=params.message,
        button_label=params.button_label,
        button_color=params.button_color,
        is_enabled=True,
        created_by=params.created_by,
    )
    ctx.session.add(panel)
    await ctx.session.flush()
    return map_ticket_panel(panel)


@registry.action(ActionName.DELETE_TICKET_PANEL, UUIDParams)
async def delete_ticket_panel(ctx: ActionContext, params: UUIDParams) -> dict[str, Any]:
    removed = await delete_panel_with_tickets(ctx.session, ctx.guild_id, params.id)
    if removed is None:
        raise NotFoundError("Ticket panel not found")
    return {"success": True, "deleted_tickets": removed}
