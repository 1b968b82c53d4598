"""
Timestamp parsing and display formatting for articles and laws.

All parsed timestamps are timezone-aware; naive inputs are taken as UTC.
"""

from datetime import date, datetime, time, timezone
from email.utils import parsedate_to_datetime
from typing import Optional


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse a publication timestamp.

    Accepts ISO-8601 strings (with or without 'Z'), RFC 2822 strings,
    datetime and date objects. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        parsed = _parse_string(value.strip())
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_string(text: str) -> Optional[datetime]:
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    return parse_timestamp(now)


# ─── Formatting ──────────────────────────────────────────────────────────────

def _plural(count: int, unit: str) -> str:
    return f"1 {unit} ago" if count == 1 else f"{count} {unit}s ago"


def format_relative_time(value, now: Optional[datetime] = None) -> str:
    """Describe a timestamp relative to now, e.g. '3 hours ago'."""
    if value is None or value == "":
        return "Unknown time"
    parsed = parse_timestamp(value)
    if parsed is None:
        return "Invalid date"

    seconds = int((_now(now) - parsed).total_seconds())
    if seconds < 60:
        # Future dates also read as "Just now"
        return "Just now"

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days < 7:
        return _plural(days, "day")
    if days < 30:
        return _plural(days // 7, "week")
    if days < 365:
        return _plural(days // 30, "month")
    return _plural(days // 365, "year")


def format_readable_date(value) -> str:
    """Format as 'Jan 15, 2024'."""
    if value is None or value == "":
        return "Unknown date"
    parsed = parse_timestamp(value)
    if parsed is None:
        return "Invalid date"
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def format_date_time(value) -> str:
    """Format as 'Jan 15, 2024 at 02:30 PM' (UTC)."""
    if value is None or value == "":
        return "Unknown date"
    parsed = parse_timestamp(value)
    if parsed is None:
        return "Invalid date"
    parsed = parsed.astimezone(timezone.utc)
    return f"{format_readable_date(parsed)} at {parsed:%I:%M %p}"


def is_recent(value, now: Optional[datetime] = None) -> bool:
    """Whether a timestamp lies within the last 24 hours."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return False
    hours = (_now(now) - parsed).total_seconds() / 3600
    return 0 <= hours <= 24


def is_today(value, now: Optional[datetime] = None) -> bool:
    """Whether a timestamp falls on the current UTC calendar day."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return False
    return parsed.astimezone(timezone.utc).date() == _now(now).astimezone(timezone.utc).date()
