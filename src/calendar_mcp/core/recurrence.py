from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..domain import Frequency


def build_rule(
    frequency: Frequency,
    *,
    interval: int = 1,
    count: Optional[int] = None,
    until: Optional[datetime] = None,
) -> str:
    """Build the iCalendar RRULE text Calendar stores in an event's ``recurrence``."""

    parts = [f"FREQ={frequency.value.upper()}", f"INTERVAL={interval}"]
    if count is not None:
        parts.append(f"COUNT={count}")
    elif until is not None:
        parts.append(f"UNTIL={until.astimezone(timezone.utc):%Y%m%dT%H%M%SZ}")
    return ";".join(parts)
