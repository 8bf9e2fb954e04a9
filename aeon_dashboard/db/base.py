import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, mapped_column
from sqlalchemy.types import TypeDecorator


class TZDateTime(TypeDecorator):
    """Timezone-aware datetime type that ensures UTC storage."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Any
    ) -> datetime | None:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def process_result_value(
        self, value: datetime | None, dialect: Any
    ) -> datetime | None:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def utcnow() -> datetime:
    """Callable default for timezone-aware UTC timestamps."""
    return datetime.now(timezone.utc)


# Guild, user, channel and role ids are Discord snowflakes kept as text,
# so they survive JSON round-trips to the browser without precision loss.
SnowflakeText = String(32)


def uuid_pk():
    """Primary key column for dashboard-managed rows."""
    return mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)


class Base(DeclarativeBase):
    """Declarative base for all dashboard ORM models."""

    type_annotation_map = {
        dict: JSONB,
        list: JSONB,
        datetime: TZDateTime,
    }
