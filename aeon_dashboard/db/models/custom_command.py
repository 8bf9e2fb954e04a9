"""Custom command ORM model.

A custom command is a prefix/slash trigger that replies with a canned
response. The trigger is unique within a guild, not globally: two guilds
may both define ``!rules``.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk


class CustomCommand(Base):
    """A guild-defined command and its response."""

    __tablename__ = "custom_commands"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    # Text that invokes the command. Unique per guild (see __table_args__).
    trigger: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    response: Mapped[str] = mapped_column(Text, nullable=False)
    response_type: Mapped[str] = mapped_column(String(16), nullable=False, default="text")

    # everyone | moderator | admin
    permission_level: Mapped[str] = mapped_column(
        String(32), nullable=False, default="everyone"
    )
    cooldown_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_tag: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        UniqueConstraint("guild_id", "trigger", name="uq_custom_commands_guild_trigger"),
    )

    def __repr__(self) -> str:
        return f"<CustomCommand(guild_id={self.guild_id}, trigger={self.trigger!r})>"
