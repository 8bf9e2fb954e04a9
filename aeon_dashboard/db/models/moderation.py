"""Moderation record ORM models.

- WarnRecord: one row per (guild, user) holding a JSON array of warnings.
  New warnings are appended to the array; existing entries are never
  edited. Readers flatten the array into one record per warning.
- BlacklistEntry: users barred from using the bot in a guild.
- ScanRecord: hits from the bot's message scanner (scam links, slurs, ...).
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk

WARN_SEVERITIES = ("low", "medium", "high")


class WarnRecord(Base):
    """
    All warnings for one user in one guild.

    Each element of ``warns`` looks like::

        {"moderator_id": "...", "reason": "...", "severity": "low",
         "timestamp": "2024-01-01T00:00:00+00:00"}

    Entries written by older bot versions may lack any of these keys.
    """

    __tablename__ = "warns_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    user_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    warns: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        UniqueConstraint("guild_id", "user_id", name="uq_warns_data_guild_user"),
    )

    def __repr__(self) -> str:
        return f"<WarnRecord(guild_id={self.guild_id}, user_id={self.user_id})>"


class BlacklistEntry(Base):
    __tablename__ = "blacklist_data"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    user_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    __table_args__ = (
        UniqueConstraint("guild_id", "user_id", name="uq_blacklist_data_guild_user"),
    )


class ScanRecord(Base):
    __tablename__ = "scanner_data"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    user_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    message_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    detected_type: Mapped[str] = mapped_column(String(64), nullable=False)
    severity: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    __table_args__ = (Index("ix_scanner_data_guild_created", "guild_id", "created_at"),)
