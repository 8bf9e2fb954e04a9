"""Message trigger ORM models.

Two tables hold "reply when a message matches" rules:

- triggers: the newer, plain-text rules
- auto_responders: the older responder table, still read by the bot

Both use the same match types (exact, contains, starts_with, ends_with,
regex).
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk

MATCH_TYPES = ("exact", "contains", "starts_with", "ends_with", "regex")


class Trigger(Base):
    """A message-matching rule with a text response."""

    __tablename__ = "triggers"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    trigger_text: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    match_type: Mapped[str] = mapped_column(String(16), nullable=False, default="contains")

    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    use_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (Index("ix_triggers_guild_id", "guild_id"),)

    def __repr__(self) -> str:
        return f"<Trigger(guild_id={self.guild_id}, match_type={self.match_type})>"


class AutoResponder(Base):
    """Legacy responder rule; same semantics as Trigger."""

    __tablename__ = "auto_responders"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    trigger_text: Mapped[str] = mapped_column(Text, nullable=False)
    match_type: Mapped[str] = mapped_column(String(16), nullable=False, default="contains")
    response: Mapped[str] = mapped_column(Text, nullable=False)
    response_type: Mapped[str] = mapped_column(String(16), nullable=False, default="text")

    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    trigger_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (Index("ix_auto_responders_guild_id", "guild_id"),)
