"""Info topic ORM model.

Info topics back the bot's ``/info`` browser. They are displayed grouped
by section, then subcategory, then name.
"""

from datetime import datetime

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from aeon_dashboard.db.base import Base, SnowflakeText, TZDateTime, utcnow


class InfoTopic(Base):
    """One browsable info page rendered as an embed."""

    __tablename__ = "info_topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guild_id: Mapped[str] = mapped_column(SnowflakeText, nullable=False)

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    section: Mapped[str] = mapped_column(String(64), nullable=False, default="common")
    subcategory: Mapped[str] = mapped_column(String(64), nullable=False, default="General")
    # Stable slug used by the bot's select menus
    topic_id: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # -------------------------------------------------------------------------
    # Embed content
    # -------------------------------------------------------------------------

    embed_title: Mapped[str | None] = mapped_column(String(256), nullable=True)
    embed_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    embed_color: Mapped[str] = mapped_column(String(16), nullable=False, default="#5865F2")
    emoji: Mapped[str] = mapped_column(String(64), nullable=False, default="📄")
    category_emoji_id: Mapped[str | None] = mapped_column(SnowflakeText, nullable=True)
    image: Mapped[str | None] = mapped_column(String(512), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(512), nullable=True)
    footer: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        Index("ix_info_topics_guild_section", "guild_id", "section", "subcategory"),
    )

    def __repr__(self) -> str:
        return f"<InfoTopic(id={self.id}, section={self.section}, name={self.name!r})>"
