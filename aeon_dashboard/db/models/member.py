"""Guild member activity ORM model.

Rows are written by the bot process; the dashboard only reads them
(leaderboards, stats).
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk


class Member(Base):
    """Activity counters for one user in one guild."""

    __tablename__ = "guild_members"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    user_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    discriminator: Mapped[str | None] = mapped_column(String(8), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    message_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Role snowflakes as a JSON array of strings
    role_ids: Mapped[list | None] = mapped_column(JSONB, nullable=True)

    joined_at: Mapped[datetime | None] = mapped_column(TZDateTime, nullable=True)
    last_active: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    __table_args__ = (
        UniqueConstraint("guild_id", "user_id", name="uq_guild_members_guild_user"),
        Index("ix_guild_members_guild_xp", "guild_id", "xp"),
    )

    def __repr__(self) -> str:
        return f"<Member(guild_id={self.guild_id}, user_id={self.user_id})>"
