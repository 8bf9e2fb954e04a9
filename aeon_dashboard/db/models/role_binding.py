"""Self-assignable role ORM models.

Two parallel tables, one per trigger mechanism:

- reaction_roles: react to a message with an emoji to get a role
- button_roles: press a message component button to get a role
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk


class ReactionRole(Base):
    __tablename__ = "reaction_roles"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    message_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    channel_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    # Unicode emoji or <:name:id> custom emoji markup
    emoji: Mapped[str] = mapped_column(String(100), nullable=False)
    role_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    role_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    __table_args__ = (Index("ix_reaction_roles_guild_message", "guild_id", "message_id"),)


class ButtonRole(Base):
    __tablename__ = "button_roles"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    message_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    channel_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    # custom_id of the component the bot attaches to the message
    button_id: Mapped[str] = mapped_column(String(100), nullable=False)
    label: Mapped[str | None] = mapped_column(String(80), nullable=True)
    emoji: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # primary | secondary | success | danger
    style: Mapped[str] = mapped_column(String(16), nullable=False, default="primary")

    role_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    role_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    __table_args__ = (Index("ix_button_roles_guild_message", "guild_id", "message_id"),)
