"""Support ticket ORM models.

A TicketPanel is the "Open Ticket" button message posted in a channel;
every Ticket opened through it references the panel.

Design principles:
- panel_id is a hard FK WITHOUT cascade. Deleting a panel therefore
  requires deleting its tickets first; the dashboard does this explicitly.
- status moves forward only from the dashboard's point of view:
  open -> in_progress (claim) -> resolved/closed (close)
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow, uuid_pk


TICKET_STATUSES = ("open", "in_progress", "resolved", "closed")


class TicketPanel(Base):
    """A ticket-opening panel posted in a guild channel."""

    __tablename__ = "ticket_panels"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    channel_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    category_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    button_label: Mapped[str] = mapped_column(
        String(80), nullable=False, default="Open Ticket"
    )
    # Discord button style name: primary | secondary | success | danger
    button_color: Mapped[str] = mapped_column(String(16), nullable=False, default="primary")

    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="dashboard_admin"
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )

    tickets: Mapped[list["Ticket"]] = relationship(back_populates="panel")

    __table_args__ = (Index("ix_ticket_panels_guild_id", "guild_id"),)

    def __repr__(self) -> str:
        return f"<TicketPanel(id={self.id}, name={self.name!r})>"


class Ticket(Base):
    """A support ticket opened by a guild member."""

    __tablename__ = "tickets"

    id: Mapped[uuid.UUID] = uuid_pk()
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    # Hard FK, no ON DELETE CASCADE (see module docstring)
    panel_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("ticket_panels.id"), nullable=True
    )

    user_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    channel_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)

    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # open | in_progress | resolved | closed (legacy rows: claimed, deleted)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="open")
    assigned_to: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    messages_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    opened_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    claimed_at: Mapped[datetime | None] = mapped_column(TZDateTime, nullable=True)
    closed_at: Mapped[datetime | None] = mapped_column(TZDateTime, nullable=True)

    panel: Mapped[TicketPanel | None] = relationship(back_populates="tickets")

    __table_args__ = (
        Index("ix_tickets_guild_opened", "guild_id", "opened_at"),
        Index("ix_tickets_panel_id", "panel_id"),
    )

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, status={self.status})>"
