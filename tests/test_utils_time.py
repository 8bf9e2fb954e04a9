"""Tests for aeon_dashboard.utils.time module."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from aeon_dashboard.utils.time import parse_iso8601, utcnow


class TestUtcnow:
    """Tests for utcnow function."""

    def test_returns_timezone_aware_datetime(self) -> None:
        """Should return a timezone-aware UTC datetime."""
        result = utcnow()
        assert result.tzinfo is not None
        assert result.tzinfo == timezone.utc

    def test_returns_current_time(self) -> None:
        """Should return approximately current time."""
        before = datetime.now(timezone.utc)
        result = utcnow()
        after = datetime.now(timezone.utc)

        assert before <= result <= after


class TestParseIso8601:
    """Tests for parse_iso8601 function."""

    def test_parses_z_suffix(self) -> None:
        """Should parse timestamps with Z suffix."""
        result = parse_iso8601("2024-01-15T10:30:00.000000Z")

        assert result is not None
        assert result.year == 2024
        assert result.month == 1
        assert result.day == 15
        assert result.hour == 10
        assert result.minute == 30
        assert result.tzinfo == timezone.utc

    def test_parses_plus_zero_offset(self) -> None:
        """Should parse timestamps with +00:00 offset."""
        result = parse_iso8601("2024-01-15T10:30:00+00:00")

        assert result is not None
        assert result.tzinfo == timezone.utc

    def test_returns_none_for_none(self) -> None:
        """Should return None for None input."""
        result = parse_iso8601(None)
        assert result is None

    def test_returns_none_for_empty_string(self) -> None:
        """Should return None for empty string."""
        result = parse_iso8601("")
        assert result is None

    def test_preserves_microseconds(self) -> None:
        """Should preserve microseconds from timestamp."""
        result = parse_iso8601("2024-01-15T10:30:00.123456Z")

        assert result is not None
        assert result.microsecond == 123456

    def test_handles_no_microseconds(self) -> None:
        """Should handle timestamps without microseconds."""
        result = parse_iso8601("2024-01-15T10:30:00Z")

        assert result is not None
        assert result.microsecond == 0

    def test_converts_other_offsets_to_utc(self) -> None:
        """Should normalise non-UTC offsets to UTC."""
        result = parse_iso8601("2024-01-15T12:30:00+02:00")

        assert result == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_naive_string_taken_as_utc(self) -> None:
        """Should treat timestamps without an offset as UTC."""
        result = parse_iso8601("2024-01-15T10:30:00")

        assert result is not None
        assert result.tzinfo == timezone.utc

    def test_accepts_datetime(self) -> None:
        """Should pass datetimes through, attaching UTC to naive ones."""
        aware = datetime(2024, 1, 15, tzinfo=timezone(timedelta(hours=-5)))

        assert parse_iso8601(aware) == aware
        assert parse_iso8601(datetime(2024, 1, 15)).tzinfo == timezone.utc

    def test_returns_none_for_garbage(self) -> None:
        """Should return None instead of raising on unparseable input."""
        assert parse_iso8601("last tuesday") is None
