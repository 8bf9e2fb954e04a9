"""Moderation record mappers: warnings, blacklist, scanner hits."""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Any, Iterable

from aeon_dashboard.db.models import BlacklistEntry, ScanRecord, WarnRecord
from aeon_dashboard.utils.json import as_dict, as_list
from aeon_dashboard.utils.time import parse_iso8601

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _warn_moderator(entry: dict[str, Any]) -> str:
    if entry.get("moderator_id"):
        return str(entry["moderator_id"])
    return str(entry.get("moderator") or "unknown")


def map_warn_entry(record: WarnRecord, entry: dict[str, Any]) -> dict[str, Any]:
    """Flatten one element of WarnRecord.warns into a standalone record.

    The synthetic id combines the storage row id with the warning's own
    timestamp; entries without a timestamp get a random suffix instead.
    """
    timestamp = entry.get("timestamp")
    suffix = timestamp if timestamp else random.random()
    created_at = parse_iso8601(timestamp) or parse_iso8601(record.created_at)

    return {
        "id": f"{record.id}-{suffix}",
        "record_id": record.id,
        "guild_id": str(record.guild_id),
        "user_id": str(record.user_id),
        "moderator_id": _warn_moderator(entry),
        "reason": entry.get("reason") or None,
        "severity": entry.get("severity") or "low",
        "created_at": created_at,
    }


def flatten_warns(records: Iterable[WarnRecord]) -> list[dict[str, Any]]:
    """One record per warning across all storage rows, newest first.

    A warning without its own timestamp sorts by its storage row's
    creation time.
    """
    flat = [
        map_warn_entry(record, as_dict(entry))
        for record in records
        for entry in as_list(record.warns)
    ]
    flat.sort(key=lambda w: w["created_at"] or _EPOCH, reverse=True)
    return flat


def map_blacklist_entry(entry: BlacklistEntry) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "guild_id": entry.guild_id,
        "user_id": entry.user_id,
        "reason": entry.reason,
        "created_by": entry.created_by,
        "created_at": entry.created_at,
    }


def map_scan(scan: ScanRecord) -> dict[str, Any]:
    return {
        "id": str(scan.id),
        "guild_id": scan.guild_id,
        "user_id": scan.user_id,
        "message_content": scan.message_content,
        "detected_type": scan.detected_type,
        "severity": scan.severity,
        "created_at": scan.created_at,
    }
