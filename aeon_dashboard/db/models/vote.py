"""Poll ORM models.

Vote holds the poll and a denormalised total_votes counter; VoteCast
holds one row per ballot. (vote_id, user_id) is unique: a user votes at
most once per poll, and a second attempt is rejected rather than
overwriting the first.

is_active as shown to users is derived: the stored flag AND end_time in
the future.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk


class Vote(Base):
    """A poll with an ordered list of options."""

    __tablename__ = "votes"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    question: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Ordered list of {"text": str, "votes": int}; older rows hold plain strings
    options: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    channel_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    message_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)

    start_time: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    end_time: Mapped[datetime | None] = mapped_column(TZDateTime, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    results_posted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    total_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    casts: Mapped[list["VoteCast"]] = relationship(
        back_populates="vote", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (Index("ix_votes_guild_created", "guild_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Vote(id={self.id}, total_votes={self.total_votes})>"


class VoteCast(Base):
    """One user's ballot on one poll."""

    __tablename__ = "vote_casts"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    vote_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("votes.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    option_index: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    vote: Mapped[Vote] = relationship(back_populates="casts")

    __table_args__ = (
        UniqueConstraint("vote_id", "user_id", name="uq_vote_casts_vote_user"),
    )

    def __repr__(self) -> str:
        return (
            f"<VoteCast(vote_id={self.vote_id}, user_id={self.user_id}, "
            f"option_index={self.option_index})>"
        )
