"""Saved embed (message template) ORM model.

The embed itself is one JSONB blob (``embed_data``) with the keys
title, description, color, footer, thumbnail, image and fields. Rows
imported from the older discrete-column layout are normalised into the
same shape when read (see actions.mappers.embed).
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk


class MessageTemplate(Base):
    __tablename__ = "message_templates"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Plain-text message content sent alongside the embed
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    embed_data: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (Index("ix_message_templates_guild_id", "guild_id"),)

    def __repr__(self) -> str:
        return f"<MessageTemplate(id={self.id}, name={self.name!r})>"
