"""Audit log handlers. Rows are written by the bot; the dashboard reads and deletes."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import map_audit_log, matches_search
from aeon_dashboard.actions.registry import ActionContext, ActionName, registry
from aeon_dashboard.actions.schemas import AuditLogParams, UUIDParams
from aeon_dashboard.db.models import AuditLog
from aeon_dashboard.db.repositories import delete_in_guild
from aeon_dashboard.errors import NotFoundError


@registry.action(ActionName.GET_AUDIT_LOGS, AuditLogParams)
async def get_audit_logs(ctx: ActionContext, params: AuditLogParams) -> list[dict[str, Any]]:
    severity = params.severity if params.severity and params.severity != "all" else None
    search = (params.search or "").lower()

    stmt = (
        select(AuditLog)
        .where(AuditLog.guild_id == ctx.guild_id)
        .order_by(AuditLog.created_at.desc())
    )
    # Severity is derived, so filtered queries are narrowed after mapping
    if not severity and not search:
        stmt = stmt.limit(params.limit)

    result = await ctx.session.execute(stmt)
    records = [map_audit_log(log) for log in result.scalars().all()]

    if severity:
        records = [r for r in records if r["severity"] == severity]
    if search:
        records = [r for r in records if matches_search(r, search)]
    return records[: params.limit]


@registry.action(ActionName.DELETE_AUDIT_LOG, UUIDParams)
async def delete_audit_log(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, AuditLog, params.id, ctx.guild_id):
        raise NotFoundError("Audit log not found")
    return {"success": True}
