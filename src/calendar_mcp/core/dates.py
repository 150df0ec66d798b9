"""Date parsing and rendering at both edges of the mapping layer.

Instants returned to tool callers are ISO-8601 UTC strings with millisecond
precision. Instants sent to Calendar are English, local-time literals that
AppleScript's ``date "..."`` coercion accepts.
"""

from __future__ import annotations

from calendar import month_name
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

MISSING_VALUE = "missing value"


def _is_date_only(text: str) -> bool:
    return len(text) == 10 and text[4] == "-" and text[7] == "-"


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time into an aware ``datetime``.

    Date-only values are UTC midnight; date-times without an offset are local
    time. Returns ``None`` for anything unparseable.
    """

    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        if _is_date_only(text):
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        if text[-1] in "zZ":
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def parse_day(value: Any) -> Optional[date]:
    """Return the calendar day named by ``value``.

    ``2025-01-15`` is that day; a date-time resolves to its local date.
    """

    if isinstance(value, str) and _is_date_only(value.strip()):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    parsed = parse_date(value)
    if parsed is None:
        return None
    return parsed.astimezone().date()


def to_iso(instant: datetime) -> str:
    utc = instant.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_to_iso(value: Any) -> str:
    if value is None or value == "" or value == MISSING_VALUE:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    try:
        return to_iso(parsed)
    except (OverflowError, ValueError):
        return ""


def format_for_applescript(instant: datetime) -> str:
    """Render ``instant`` as ``January 15, 2025 10:30:00 AM`` in local time."""

    local = instant.astimezone()
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{month_name[local.month]} {local.day}, {local.year} "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def local_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min).astimezone()


def local_hour(day: date, hour: int) -> datetime:
    """Wall-clock ``hour`` on ``day`` in local time; ``24`` is the next local midnight."""

    if hour == 24:
        return local_midnight(day + timedelta(days=1))
    return datetime.combine(day, time(hour)).astimezone()


def day_window(day: date) -> tuple[datetime, datetime]:
    start = local_midnight(day)
    return start, local_midnight(day + timedelta(days=1))
