from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_time_of_day(value: Any) -> Optional[time]:
    """Normalize a shift time-of-day to ``datetime.time``.

    Shift times can arrive as:
    - datetime.time
    - datetime.timedelta (MySQL TIME columns)
    - string ('08:30' or '08:30:00')

    Returns None instead of raising for anything that is not a valid time.
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value.replace(tzinfo=None)

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) not in (2, 3):
            return None
        try:
            numbers = [int(p) for p in parts]
        except ValueError:
            return None
        hours, minutes = numbers[0], numbers[1]
        seconds = numbers[2] if len(numbers) == 3 else 0
        try:
            return time(hour=hours, minute=minutes, second=seconds)
        except ValueError:
            return None

    return None


def coerce_instant(value: Any) -> Optional[datetime]:
    """Normalize a timestamp to a naive local ``datetime``.

    Aware datetimes are converted to the host's local wall-clock so that both
    sides of every comparison share the same basis. ISO-8601 strings are
    accepted (a trailing 'Z' is read as UTC). Returns None when unparseable.
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return coerce_instant(parsed)

    return None


def coerce_date(value: Any) -> Optional[date]:
    """Normalize an attendance date (date, datetime or 'YYYY-MM-DD')."""

    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        try:
            return parse_iso_date(value.strip()[:10])
        except ValueError:
            return None

    return None


def floor_minutes(delta: timedelta) -> int:
    """Whole minutes in a duration, truncated (65s -> 1, 59s -> 0)."""
    seconds = delta.total_seconds()
    if seconds >= 0:
        return int(seconds // 60)
    return -int(-seconds // 60)


def format_minutes(minutes: int) -> str:
    """Format a minute count as HH:MM for reports."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
