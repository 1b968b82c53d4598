"""Tests for timestamp parsing and relative date formatting."""

from datetime import date, datetime, timedelta, timezone

import pytest
from time_utils import (
    format_date_time,
    format_readable_date,
    format_relative_time,
    is_recent,
    is_today,
    parse_timestamp,
)

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def ago(**delta):
    return (NOW - timedelta(**delta)).isoformat()


# ─── Parsing Tests ───────────────────────────────────────────────────────────

class TestParseTimestamp:

    def test_iso_with_z(self):
        assert parse_timestamp("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_iso_with_offset(self):
        parsed = parse_timestamp("2024-01-15T10:30:00+02:00")
        assert parsed == datetime(2024, 1, 15, 8, 30, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-01-15").tzinfo is not None
        assert parse_timestamp(datetime(2024, 1, 15)).tzinfo is timezone.utc

    def test_date_object(self):
        assert parse_timestamp(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_rfc2822(self):
        parsed = parse_timestamp("Mon, 15 Jan 2024 10:30:00 GMT")
        assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday", "2024-13-45", 12345, []])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None


# ─── Formatting Tests ────────────────────────────────────────────────────────

class TestFormatRelativeTime:

    @pytest.mark.parametrize("delta,expected", [
        ({"seconds": 30}, "Just now"),
        ({"minutes": 1}, "1 minute ago"),
        ({"minutes": 5}, "5 minutes ago"),
        ({"hours": 1}, "1 hour ago"),
        ({"hours": 23}, "23 hours ago"),
        ({"days": 1}, "1 day ago"),
        ({"days": 6}, "6 days ago"),
        ({"days": 14}, "2 weeks ago"),
        ({"days": 60}, "2 months ago"),
        ({"days": 400}, "1 year ago"),
        ({"days": 800}, "2 years ago"),
    ])
    def test_buckets(self, delta, expected):
        assert format_relative_time(ago(**delta), now=NOW) == expected

    def test_future_is_just_now(self):
        future = (NOW + timedelta(hours=3)).isoformat()
        assert format_relative_time(future, now=NOW) == "Just now"

    def test_missing_and_invalid(self):
        assert format_relative_time(None) == "Unknown time"
        assert format_relative_time("") == "Unknown time"
        assert format_relative_time("garbage") == "Invalid date"


class TestFormatDates:

    def test_readable_date(self):
        assert format_readable_date("2024-01-15T10:30:00Z") == "Jan 15, 2024"
        assert format_readable_date(date(2023, 12, 5)) == "Dec 5, 2023"

    def test_date_time_in_utc(self):
        assert format_date_time("2024-01-15T16:30:00+02:00") == "Jan 15, 2024 at 02:30 PM"

    def test_missing_and_invalid(self):
        assert format_readable_date(None) == "Unknown date"
        assert format_date_time("") == "Unknown date"
        assert format_readable_date("nope") == "Invalid date"
        assert format_date_time("nope") == "Invalid date"


class TestRecency:

    def test_is_recent(self):
        assert is_recent(ago(hours=2), now=NOW)
        assert not is_recent(ago(hours=30), now=NOW)
        assert not is_recent((NOW + timedelta(hours=1)).isoformat(), now=NOW)
        assert not is_recent("bad", now=NOW)

    def test_is_today(self):
        assert is_today("2024-06-15T00:05:00Z", now=NOW)
        assert not is_today("2024-06-14T23:55:00Z", now=NOW)
        assert not is_today(None, now=NOW)
