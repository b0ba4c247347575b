"""Unit tests for timestamp utilities."""

from datetime import date, datetime, timedelta, timezone

import pytest

from careernavigate.utils.timestamps import (
    ensure_utc,
    format_letter_date,
    format_timestamp,
    utc_now,
)


class TestUtcNow:
    """Tests for utc_now function."""

    def test_utc_now_returns_utc_datetime(self):
        """Test that utc_now returns a timezone-aware datetime in UTC."""
        now = utc_now()

        assert now.tzinfo == timezone.utc
        assert isinstance(now, datetime)

    def test_utc_now_is_recent(self):
        """Test that utc_now returns a recent timestamp."""
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestEnsureUtc:
    """Tests for ensure_utc function."""

    def test_ensure_utc_with_none(self):
        """Test that None input returns None."""
        assert ensure_utc(None) is None

    def test_ensure_utc_with_naive_datetime(self):
        """Test that naive datetime is treated as UTC."""
        result = ensure_utc(datetime(2025, 11, 4, 12, 0, 0))

        assert result == datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)

    def test_ensure_utc_converts_other_zones(self):
        """Test that aware datetimes in other zones are converted to UTC."""
        ist = timezone(timedelta(hours=5, minutes=30))

        result = ensure_utc(datetime(2025, 11, 4, 17, 30, tzinfo=ist))

        assert result.tzinfo == timezone.utc
        assert result.hour == 12
        assert result.minute == 0


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_format_timestamp(self):
        """Test ISO format with Z suffix and second precision."""
        dt = datetime(2025, 11, 4, 12, 30, 45, 123456, tzinfo=timezone.utc)

        assert format_timestamp(dt) == "2025-11-04T12:30:45Z"

    def test_format_naive_timestamp(self):
        """Test naive datetimes are formatted as UTC."""
        assert format_timestamp(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05Z"


class TestFormatLetterDate:
    """Tests for format_letter_date function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (date(2025, 11, 4), "November 4, 2025"),
            (date(2026, 1, 31), "January 31, 2026"),
            (datetime(2024, 2, 29, 23, 59, tzinfo=timezone.utc), "February 29, 2024"),
        ],
    )
    def test_format_letter_date(self, value, expected):
        """Test long month name with an unpadded day."""
        assert format_letter_date(value) == expected

    def test_defaults_to_today(self):
        """Test no argument formats the current UTC date."""
        today = utc_now()

        assert format_letter_date() == f"{today.strftime('%B')} {today.day}, {today.year}"
