from datetime import datetime, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso8601(value: Any) -> Optional[datetime]:
    """
    Parse an ISO8601 timestamp into a timezone-aware UTC datetime.

    Accepts datetimes as-is (naive ones are taken to be UTC). Returns None
    for empty or unparseable values instead of raising, since warning
    entries written by the bot are not validated.
    """
    if not value:
        return None

    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt
