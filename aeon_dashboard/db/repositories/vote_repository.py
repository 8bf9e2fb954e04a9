"""Vote repository: ballot casting."""

from __future__ import annotations

import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aeon_dashboard.db.models import Vote, VoteCast
from aeon_dashboard.errors import ConflictError, InvalidParamsError, NotFoundError
from aeon_dashboard.utils.time import utcnow


async def get_existing_cast(
    session: AsyncSession, vote_id: uuid.UUID, user_id: str
) -> VoteCast | None:
    result = await session.execute(
        select(VoteCast).where(VoteCast.vote_id == vote_id, VoteCast.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def cast_vote(
    session: AsyncSession,
    guild_id: str,
    vote_id: uuid.UUID,
    user_id: str,
    option_index: int,
) -> VoteCast:
    """Record one ballot and bump the poll's total_votes by exactly one.

    The ballot insert is flushed before the counter update, so the counter
    is only touched once the (vote_id, user_id) row exists. Both writes
    share the caller's transaction.

    Raises:
        ConflictError: the user already voted on this poll, or the poll ended
        NotFoundError: no such poll in this guild
        InvalidParamsError: option_index is out of range
    """
    if await get_existing_cast(session, vote_id, user_id) is not None:
        raise ConflictError("User has already voted on this poll")

    result = await session.execute(
        select(Vote).where(Vote.id == vote_id, Vote.guild_id == guild_id)
    )
    vote = result.scalar_one_or_none()
    if vote is None:
        raise NotFoundError("Vote not found")

    if not vote.is_active or (vote.end_time is not None and vote.end_time <= utcnow()):
        raise ConflictError("Voting on this poll has ended")

    options = vote.options if isinstance(vote.options, list) else []
    if not 0 <= option_index < len(options):
        raise InvalidParamsError(
            f"option_index must be between 0 and {max(len(options) - 1, 0)}"
        )

    cast = VoteCast(
        guild_id=guild_id,
        vote_id=vote_id,
        user_id=user_id,
        option_index=option_index,
    )
    session.add(cast)
    try:
        await session.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent cast by the same user
        raise ConflictError("User has already voted on this poll") from e

    counter = await session.execute(
        update(Vote)
        .where(Vote.id == vote_id)
        .values(total_votes=Vote.total_votes + 1)
        .execution_options(synchronize_session=False)
    )
    if counter.rowcount != 1:
        raise RuntimeError(f"Failed to update total_votes for vote {vote_id}")

    return cast
