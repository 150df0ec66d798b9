from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..domain import Frequency
from .registry import register_api
from .serializers import serialize_calendar, serialize_events, serialize_free_slot, serialize_permissions
from .state import api_state

_CALENDAR_FILTER = "Calendar name to filter by (optional)"
_START_DATE = "Start date/time in ISO 8601 format"
_END_DATE = "End date/time in ISO 8601 format"


@register_api(
    "calendar_check_permissions",
    description="Check whether the server can reach Apple Calendar.",
    category="permissions",
    tags=("read", "permissions"),
)
def calendar_check_permissions() -> Dict[str, Any]:
    return serialize_permissions(api_state.calendar.check_permissions())


@register_api(
    "calendar_get_calendars",
    description="List all calendars with their ids, names, colors and writability.",
    category="calendars",
    tags=("read",),
)
def calendar_get_calendars() -> List[Dict[str, Any]]:
    return [serialize_calendar(calendar) for calendar in api_state.calendar.list_calendars()]


@register_api(
    "calendar_get_events",
    description="Get events starting within a date range, sorted by start time.",
    category="events",
    tags=("read",),
    params={
        "calendar": _CALENDAR_FILTER,
        "start_date": f"{_START_DATE} (default: now)",
        "end_date": f"{_END_DATE} (default: 30 days from now)",
        "limit": "Maximum events to return (default: 100)",
    },
)
def calendar_get_events(
    calendar: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    events = api_state.calendar.get_events(calendar=calendar, start_date=start_date, end_date=end_date, limit=limit)
    return serialize_events(events)


@register_api(
    "calendar_create_event",
    description="Create a new calendar event.",
    category="events",
    tags=("write",),
    params={
        "summary": "Event title",
        "start_date": _START_DATE,
        "end_date": f"{_END_DATE} (default: 1 hour after start, 1 day for all-day events)",
        "all_day": "Is this an all-day event? (default: false)",
        "calendar": "Calendar to add the event to (default: first calendar)",
        "description": "Event description/notes",
        "location": "Event location",
        "url": "URL associated with the event",
    },
)
def calendar_create_event(
    summary: str,
    start_date: str,
    end_date: Optional[str] = None,
    all_day: Optional[bool] = None,
    calendar: Optional[str] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    url: Optional[str] = None,
) -> Dict[str, Any]:
    event_id = api_state.calendar.create_event(
        summary=summary,
        start_date=start_date,
        end_date=end_date,
        all_day=all_day,
        calendar=calendar,
        description=description,
        location=location,
        url=url,
    )
    return {"success": True, "id": event_id}


@register_api(
    "calendar_update_event",
    description="Update fields of an existing event; omitted fields are left unchanged.",
    category="events",
    tags=("write",),
    params={
        "event_id": "Event ID to update",
        "calendar": "Calendar containing the event",
        "summary": "New event title",
        "start_date": "New start date/time",
        "end_date": "New end date/time",
        "description": "New description",
        "location": "New location",
        "all_day": "Change all-day status",
    },
)
def calendar_update_event(
    event_id: str,
    calendar: str,
    summary: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    all_day: Optional[bool] = None,
) -> Dict[str, Any]:
    api_state.calendar.update_event(
        event_id,
        calendar,
        summary=summary,
        start_date=start_date,
        end_date=end_date,
        description=description,
        location=location,
        all_day=all_day,
    )
    return {"success": True}


@register_api(
    "calendar_delete_event",
    description="Delete an event from the named calendar.",
    category="events",
    tags=("write",),
    params={
        "event_id": "Event ID to delete",
        "calendar": "Calendar containing the event",
    },
)
def calendar_delete_event(event_id: str, calendar: str) -> Dict[str, Any]:
    api_state.calendar.delete_event(event_id, calendar)
    return {"success": True}


@register_api(
    "calendar_search",
    description="Search the next 365 days for events whose title, description or location contains the text.",
    category="events",
    tags=("read", "search"),
    params={
        "query": "Text to search for (case-insensitive)",
        "calendar": "Limit the search to one calendar (optional)",
        "limit": "Maximum results (default: 50)",
    },
)
def calendar_search(query: str, calendar: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    return serialize_events(api_state.calendar.search_events(query, calendar=calendar, limit=limit))


@register_api(
    "calendar_get_today",
    description="Get all events scheduled for today.",
    category="events",
    tags=("read",),
)
def calendar_get_today() -> List[Dict[str, Any]]:
    return serialize_events(api_state.calendar.get_today_events())


@register_api(
    "calendar_get_upcoming",
    description="Get upcoming events within the next N days.",
    category="events",
    tags=("read",),
    params={"days": "Number of days to look ahead (default: 7)"},
)
def calendar_get_upcoming(days: Optional[int] = None) -> List[Dict[str, Any]]:
    return serialize_events(api_state.calendar.get_upcoming_events(days))


@register_api(
    "calendar_find_free_time",
    description="Find free time slots of at least the given length within working hours on a day.",
    category="availability",
    tags=("read", "availability"),
    params={
        "date": "Day to inspect (YYYY-MM-DD)",
        "duration_minutes": "Minimum slot length in minutes",
        "start_hour": "Working day start hour, 0-23 (default: 9)",
        "end_hour": "Working day end hour, 1-24 (default: 17)",
        "calendar": _CALENDAR_FILTER,
    },
)
def calendar_find_free_time(
    date: str,
    duration_minutes: int,
    start_hour: Optional[int] = None,
    end_hour: Optional[int] = None,
    calendar: Optional[str] = None,
) -> List[Dict[str, Any]]:
    slots = api_state.calendar.find_free_time(
        date,
        duration_minutes,
        start_hour=start_hour,
        end_hour=end_hour,
        calendar=calendar,
    )
    return [serialize_free_slot(slot) for slot in slots]


@register_api(
    "calendar_create_recurring_event",
    description="Create an event that repeats daily, weekly, monthly or yearly.",
    category="events",
    tags=("write", "recurrence"),
    choices={"frequency": Frequency.values()},
    params={
        "summary": "Event title",
        "start_date": "Start date/time of the first occurrence in ISO 8601 format",
        "frequency": "How often the event repeats",
        "end_date": "End date/time of the first occurrence (default: 1 hour after start)",
        "all_day": "Is this an all-day event? (default: false)",
        "calendar": "Calendar to add the event to (default: first calendar)",
        "description": "Event description/notes",
        "location": "Event location",
        "interval": "Repeat every N periods (default: 1)",
        "count": "Number of occurrences (cannot be combined with until)",
        "until": "Last possible occurrence date/time in ISO 8601 format",
    },
)
def calendar_create_recurring_event(
    summary: str,
    start_date: str,
    frequency: str,
    end_date: Optional[str] = None,
    all_day: Optional[bool] = None,
    calendar: Optional[str] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    interval: Optional[int] = None,
    count: Optional[int] = None,
    until: Optional[str] = None,
) -> Dict[str, Any]:
    event_id, rule = api_state.calendar.create_recurring_event(
        summary=summary,
        start_date=start_date,
        frequency=frequency,
        end_date=end_date,
        all_day=all_day,
        calendar=calendar,
        description=description,
        location=location,
        interval=interval,
        count=count,
        until=until,
    )
    return {"success": True, "id": event_id, "recurrence": rule}


@register_api(
    "calendar_open",
    description="Bring the Calendar app to the front.",
    category="app",
    tags=("app",),
)
def calendar_open() -> Dict[str, Any]:
    api_state.calendar.open_calendar()
    return {"success": True}


@register_api(
    "calendar_open_date",
    description="Open the Calendar app in day view at a specific date.",
    category="app",
    tags=("app",),
    params={"date": "Date to show (YYYY-MM-DD)"},
)
def calendar_open_date(date: str) -> Dict[str, Any]:
    shown = api_state.calendar.open_date(date)
    return {"success": True, "date": shown.isoformat()}
