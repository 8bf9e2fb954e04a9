"""Warnings, blacklist and scanner handlers.

Warnings live in one row per (guild, user) with a JSON array of entries;
reads flatten them and createWarn appends. deleteWarn removes the whole row
and reports how many entries went with it.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from aeon_dashboard.actions.mappers import (
    flatten_warns,
    map_blacklist_entry,
    map_scan,
    map_warn_entry,
)
from aeon_dashboard.actions.registry import ActionContext, ActionName, ActionParams, registry
from aeon_dashboard.actions.schemas import (
    CreateBlacklistParams,
    CreateScanParams,
    CreateWarnParams,
    DeleteWarnParams,
    ScanFilterParams,
    UUIDParams,
    WarnFilterParams,
)
from aeon_dashboard.db.models import BlacklistEntry, ScanRecord, WarnRecord
from aeon_dashboard.db.repositories import (
    append_warning,
    delete_in_guild,
    delete_warn_record,
)
from aeon_dashboard.errors import NotFoundError
from aeon_dashboard.utils.time import utcnow

# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


@registry.action(ActionName.GET_WARNS, WarnFilterParams)
async def get_warns(ctx: ActionContext, params: WarnFilterParams) -> list[dict[str, Any]]:
    stmt = select(WarnRecord).where(WarnRecord.guild_id == ctx.guild_id)
    if params.user_id:
        stmt = stmt.where(WarnRecord.user_id == params.user_id)

    result = await ctx.session.execute(stmt)
    warns = flatten_warns(result.scalars().all())

    if params.severity and params.severity != "all":
        warns = [w for w in warns if w["severity"] == params.severity]
    return warns


@registry.action(ActionName.CREATE_WARN, CreateWarnParams)
async def create_warn(ctx: ActionContext, params: CreateWarnParams) -> dict[str, Any]:
    entry = {
        "moderator_id": params.moderator_id,
        "reason": params.reason,
        "severity": params.severity,
        "timestamp": utcnow().isoformat(),
    }
    record = await append_warning(ctx.session, ctx.guild_id, params.user_id, entry)
    return map_warn_entry(record, entry)


@registry.action(ActionName.DELETE_WARN, DeleteWarnParams)
async def delete_warn(ctx: ActionContext, params: DeleteWarnParams) -> dict[str, Any]:
    removed = await delete_warn_record(ctx.session, params.record_id, ctx.guild_id)
    if removed is None:
        raise NotFoundError("Warning not found")
    return {"success": True, "deleted_warnings": removed}


# ---------------------------------------------------------------------------
# Blacklist
# ---------------------------------------------------------------------------


@registry.action(ActionName.GET_BLACKLIST)
async def get_blacklist(ctx: ActionContext, params: ActionParams) -> list[dict[str, Any]]:
    result = await ctx.session.execute(
        select(BlacklistEntry)
        .where(BlacklistEntry.guild_id == ctx.guild_id)
        .order_by(BlacklistEntry.created_at.desc())
    )
    return [map_blacklist_entry(e) for e in result.scalars().all()]


@registry.action(ActionName.CREATE_BLACKLIST, CreateBlacklistParams)
async def create_blacklist(ctx: ActionContext, params: CreateBlacklistParams) -> dict[str, Any]:
    entry = BlacklistEntry(
        guild_id=ctx.guild_id,
        user_id=params.user_id,
        reason=params.reason,
        created_by=params.created_by,
    )
    ctx.session.add(entry)
    await ctx.session.flush()
    return map_blacklist_entry(entry)


@registry.action(ActionName.DELETE_BLACKLIST, UUIDParams)
async def delete_blacklist(ctx: ActionContext, params: UUIDParams) -> dict[str, bool]:
    if not await delete_in_guild(ctx.session, BlacklistEntry, params.id, ctx.guild_id):
        raise NotFoundError("Blacklist entry not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


@registry.action(ActionName.GET_SCANS, ScanFilterParams)
async def get_scans(ctx: ActionContext, params: ScanFilterParams) -> list[dict[str, Any]]:
    stmt = (
        select(ScanRecord)
        .where(ScanRecord.guild_id == ctx.guild_id)
        .order_by(ScanRecord.created_at.desc())
    )
    if params.user_id:
        stmt = stmt.where(ScanRecord.user_id == params.user_id)
    if params.severity:
        stmt = stmt.where(ScanRecord.severity == params.severity)
    if params.detected_type:
        stmt = stmt.where(ScanRecord.detected_type == params.detected_type)

    result = await ctx.session.execute(stmt)
    return [map_scan(s) for s in result.scalars().all()]


@registry.action(ActionName.CREATE_SCAN, CreateScanParams)
async def create_scan(ctx: ActionContext, params: CreateScanParams) -> dict[str, Any]:
    scan = ScanRecord(
        guild_id=ctx.guild_id,
        user_id=params.user_id,
        message_content=params.message_content,
        detected_type=params.detected_type,
        severity=params.severity,
    )
    ctx.session.add(scan)
    await ctx.session.flush()
    return map_scan(scan)
