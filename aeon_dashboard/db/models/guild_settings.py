"""Per-guild bot settings ORM model.

One row per guild, written with upsert semantics. The bot reads the
feature toggles on startup and whenever the dashboard saves them.
"""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow


class GuildSetting(Base):
    """
    Bot configuration for a single guild.

    guild_id is the primary key: there is never more than one settings row
    per guild. Omitted fields fall back to the defaults the bot itself uses.
    """

    __tablename__ = "guild_settings"

    guild_id: Mapped[str] = mapped_column(SnowflakeText, primary_key=True)

    # -------------------------------------------------------------------------
    # Command handling
    # -------------------------------------------------------------------------

    prefix: Mapped[str] = mapped_column(String(16), nullable=False, default="!")
    use_slash_commands: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )

    # Cooldown applied to every command, in milliseconds.
    global_cooldown: Mapped[int] = mapped_column(Integer, nullable=False, default=1000)

    # Free-form cooldown options, e.g. {"ratelimit_per_minute": 20}
    command_cooldown: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    # -------------------------------------------------------------------------
    # Feature toggles
    # -------------------------------------------------------------------------

    moderation_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    levelling_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    fun_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    tickets_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    custom_commands_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    auto_responders_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )

    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<GuildSetting(guild_id={self.guild_id}, prefix={self.prefix!r})>"
