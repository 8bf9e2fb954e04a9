"""Aeon dashboard database models.

All models use SQLAlchemy 2.0 syntax with PostgreSQL dialect.
"""

from aeon_dashboard.db.base import Base
from aeon_dashboard.db.models.audit_log import AuditLog
from aeon_dashboard.db.models.custom_command import CustomCommand
from aeon_dashboard.db.models.guild_settings import GuildSetting
from aeon_dashboard.db.models.info_topic import InfoTopic
from aeon_dashboard.db.models.member import Member
from aeon_dashboard.db.models.message_template import MessageTemplate
from aeon_dashboard.db.models.moderation import BlacklistEntry, ScanRecord, WarnRecord
from aeon_dashboard.db.models.role_binding import ButtonRole, ReactionRole
from aeon_dashboard.db.models.ticket import Ticket, TicketPanel
from aeon_dashboard.db.models.trigger import MATCH_TYPES, AutoResponder, Trigger
from aeon_dashboard.db.models.vote import Vote, VoteCast

__all__ = [
    "Base",
    "MATCH_TYPES",
    "AuditLog",
    "AutoResponder",
    "BlacklistEntry",
    "ButtonRole",
    "CustomCommand",
    "GuildSetting",
    "InfoTopic",
    "Member",
    "MessageTemplate",
    "ReactionRole",
    "ScanRecord",
    "Ticket",
    "TicketPanel",
    "Trigger",
    "Vote",
    "VoteCast",
    "WarnRecord",
]
