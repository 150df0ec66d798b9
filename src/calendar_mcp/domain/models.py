from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ..core.dates import MISSING_VALUE, normalize_to_iso
from ..core.text import ascii_lower


def _text(value: Any) -> str:
    if value is None or value == MISSING_VALUE:
        return ""
    return str(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _color_token(value: Any) -> str:
    """Render Calendar's 16-bit ``r,g,b`` triple as ``#rrggbb``."""

    text = _text(value)
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return text
    channels = [min(int(part), 65535) // 257 for part in parts]
    return "#" + "".join(f"{channel:02x}" for channel in channels)


@dataclass(slots=True)
class Calendar:
    id: str
    name: str
    color: str = ""
    writable: bool = False

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Calendar":
        return cls(
            id=_text(record.get("id")),
            name=_text(record.get("name")),
            color=_color_token(record.get("color")),
            writable=_flag(record.get("writable")),
        )


@dataclass(slots=True)
class CalendarEvent:
    id: str
    summary: str
    start_date: str
    end_date: str
    description: str = ""
    location: str = ""
    all_day: bool = False
    calendar: str = ""
    url: str = ""
    status: str = ""

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CalendarEvent":
        return cls(
            id=_text(record.get("id")),
            summary=_text(record.get("summary")),
            start_date=normalize_to_iso(record.get("startDate")),
            end_date=normalize_to_iso(record.get("endDate")),
            description=_text(record.get("description")),
            location=_text(record.get("location")),
            all_day=_flag(record.get("allDay")),
            calendar=_text(record.get("calendar")),
            url=_text(record.get("url")),
            status=_text(record.get("status")),
        )

    def matches(self, needle: str) -> bool:
        """ASCII case-insensitive substring test over summary, description and location."""

        folded = ascii_lower(needle)
        return any(folded in ascii_lower(text) for text in (self.summary, self.description, self.location))


@dataclass(slots=True)
class PermissionStatus:
    calendar: bool = False
    details: List[str] = field(default_factory=list)


@dataclass(slots=True)
class FreeSlot:
    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)
