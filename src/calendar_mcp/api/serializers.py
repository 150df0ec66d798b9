from __future__ import annotations

from typing import Any, Dict, Iterable, List

import orjson

from ..domain import Calendar, CalendarEvent, FreeSlot, PermissionStatus
from .models import CalendarPayload, EventPayload, FreeSlotPayload, PermissionPayload


def serialize_calendar(calendar: Calendar) -> Dict[str, Any]:
    return CalendarPayload.from_domain(calendar).model_dump()


def serialize_event(event: CalendarEvent) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump(by_alias=True)


def serialize_events(events: Iterable[CalendarEvent]) -> List[Dict[str, Any]]:
    return [serialize_event(event) for event in events]


def serialize_permissions(status: PermissionStatus) -> Dict[str, Any]:
    return PermissionPayload.from_domain(status).model_dump()


def serialize_free_slot(slot: FreeSlot) -> Dict[str, Any]:
    return FreeSlotPayload.from_domain(slot).model_dump(by_alias=True)


def render_payload(result: Any) -> str:
    """Scalars pass through as text; anything else becomes indented JSON."""

    if isinstance(result, str):
        return result
    return orjson.dumps(result, option=orjson.OPT_INDENT_2).decode("utf-8")
