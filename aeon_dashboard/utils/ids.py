# aeon_dashboard/utils/ids.py
from __future__ import annotations

import re
from typing import Any

SNOWFLAKE_RE = re.compile(r"^\d{17,19}$")


def is_snowflake(value: str | int | None) -> bool:
    if value is None:
        return False
    return bool(SNOWFLAKE_RE.match(str(value)))


def to_int(value: Any, fallback: int) -> int:
    """Coerce a loosely typed number (int, float, numeric string) to int."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return fallback
    if isinstance(value, str):
        try:
            return int(float(value))
        except (OverflowError, ValueError):
            return fallback
    return fallback


def clamp(value: Any, fallback: int, low: int, high: int) -> int:
    """to_int() bounded to [low, high]."""
    return max(low, min(high, to_int(value, fallback)))


def slugify(name: str) -> str:
    return re.sub(r"\s+", "_", name.strip().lower())
