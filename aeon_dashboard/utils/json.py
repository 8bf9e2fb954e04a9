# aeon_dashboard/utils/json.py
from __future__ import annotations

from typing import Any


def compact_json(data: Any) -> Any:
    """
    Remove keys with None values (shallow).
    Useful before storing JSONB.
    """
    if not isinstance(data, dict):
        return data
    return {k: v for k, v in data.items() if v is not None}


def as_dict(value: Any) -> dict:
    """Return value if it is a JSON object, else an empty dict."""
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    """Return value if it is a JSON array, else an empty list."""
    return value if isinstance(value, list) else []
