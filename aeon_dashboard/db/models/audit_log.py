"""Audit log ORM model.

Append-only record of moderation and bot actions. Rows are never updated;
the dashboard may delete them. Severity is derived at read time from
action_type and is not stored.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk


class AuditLog(Base):
    """One logged action in a guild."""

    __tablename__ = "audit_logs"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    # ban, kick, warn, mute, message, ... (open set, written by the bot)
    action_type: Mapped[str] = mapped_column(String(64), nullable=False)

    user_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    moderator_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    channel_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    # True when the bot acted on its own (automod) rather than a moderator
    bot_action: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_audit_logs_guild_created", "guild_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<AuditLog(guild_id={self.guild_id}, action_type={self.action_type})>"
