"""Poll mappers and result tallying."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from aeon_dashboard.db.models import Vote, VoteCast
from aeon_dashboard.utils.json import as_list
from aeon_dashboard.utils.time import utcnow


def option_text(option: Any) -> str:
    """Options are {"text": ..., "votes": ...} objects or, in old rows, strings."""
    if isinstance(option, dict):
        return str(option.get("text") or "")
    if option is None:
        return ""
    return str(option)


def is_vote_active(vote: Vote, now: datetime | None = None) -> bool:
    """Stored flag AND an end time still in the future."""
    now = now or utcnow()
    return bool(vote.is_active) and vote.end_time is not None and vote.end_time > now


def map_vote(vote: Vote, now: datetime | None = None) -> dict[str, Any]:
    return {
        "id": str(vote.id),
        "guild_id": vote.guild_id,
        "question": vote.question,
        "description": vote.description,
        "options": as_list(vote.options),
        "created_by": vote.created_by,
        "channel_id": vote.channel_id,
        "message_id": vote.message_id,
        "start_time": vote.start_time,
        "end_time": vote.end_time,
        "is_active": is_vote_active(vote, now),
        "total_votes": vote.total_votes or 0,
        "created_at": vote.created_at,
    }


def map_vote_cast(cast: VoteCast) -> dict[str, Any]:
    return {
        "id": str(cast.id),
        "guild_id": cast.guild_id,
        "vote_id": str(cast.vote_id),
        "user_id": cast.user_id,
        "option_index": cast.option_index,
        "created_at": cast.created_at,
    }


def tally_results(vote: Vote, casts: Iterable[VoteCast]) -> dict[str, Any]:
    """Per-option ballot counts with whole-number percentages of total_votes."""
    options = as_list(vote.options)
    counts = [0] * len(options)
    for cast in casts:
        if 0 <= cast.option_index < len(counts):
            counts[cast.option_index] += 1

    total = vote.total_votes or 0
    return {
        "id": str(vote.id),
        "guild_id": vote.guild_id,
        "question": vote.question,
        "description": vote.description,
        "options": options,
        "total_votes": total,
        "results": [
            {
                "option_index": index,
                "option_text": option_text(option),
                "vote_count": counts[index],
                "percentage": round(counts[index] / total * 100) if total > 0 else 0,
            }
            for index, option in enumerate(options)
        ],
        "created_at": vote.created_at,
    }
