from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from ..core import scripts
from ..core.availability import find_free_slots
from ..core.dates import day_window, local_hour, local_midnight, parse_date, parse_day
from ..core.errors import ScriptExecutionError, ToolValidationError
from ..core.parsing import parse_calendars, parse_events, scalar_text
from ..core.recurrence import build_rule
from ..domain import Calendar, CalendarEvent, FreeSlot, Frequency, PermissionStatus
from .context import ServiceContext

logger = logging.getLogger(__name__)

DEFAULT_EVENT_LIMIT = 100
DEFAULT_SEARCH_LIMIT = 50
DEFAULT_EVENT_WINDOW = timedelta(days=30)
SEARCH_WINDOW = timedelta(days=365)
DEFAULT_UPCOMING_DAYS = 7
DAY_EVENT_LIMIT = 1000

UPDATABLE_FIELDS = ("summary", "start_date", "end_date", "description", "location", "all_day")


def _require_date(field_name: str, value: str) -> datetime:
    parsed = parse_date(value)
    if parsed is None:
        raise ToolValidationError.invalid(field_name, f"{value!r} is not an ISO 8601 date")
    return parsed


def _optional_date(field_name: str, value: Optional[str]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return _require_date(field_name, value)


def _at_least(field_name: str, value: Optional[int], default: int, minimum: int = 1) -> int:
    if value is None:
        return default
    if value < minimum:
        raise ToolValidationError.invalid(field_name, f"must be at least {minimum}")
    return value


def _frequency(value: str) -> Frequency:
    try:
        return Frequency(value)
    except ValueError as exc:
        allowed = ", ".join(Frequency.values())
        raise ToolValidationError.invalid("frequency", f"{value!r} is not one of {allowed}") from exc


@dataclass(slots=True)
class CalendarService:
    context: ServiceContext = field(default_factory=ServiceContext)

    def _run(self, script: str) -> str:
        return self.context.runner.run(script)

    # Permissions and calendars -------------------------------------------
    def check_permissions(self) -> PermissionStatus:
        status = PermissionStatus()
        try:
            self._run(scripts.permission_probe_script())
        except ScriptExecutionError as exc:
            logger.info("Calendar permission probe failed: %s", exc)
            status.details.append("Calendar: NOT accessible (grant Calendar permission in System Settings)")
            status.details.append(f"Reason: {exc}")
        else:
            status.calendar = True
            status.details.append("Calendar: accessible")
        return status

    def list_calendars(self) -> List[Calendar]:
        return parse_calendars(self._run(scripts.list_calendars_script()))

    # Event queries -------------------------------------------------------
    def _events_between(
        self,
        start: datetime,
        end: datetime,
        *,
        calendar: Optional[str] = None,
        limit: int = DEFAULT_EVENT_LIMIT,
        overlapping: bool = False,
    ) -> List[CalendarEvent]:
        script = scripts.list_events_script(start, end, calendar=calendar, limit=limit, overlapping=overlapping)
        return parse_events(self._run(script))

    def get_events(
        self,
        *,
        calendar: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[CalendarEvent]:
        now = self.context.now()
        start = _optional_date("start_date", start_date) or now
        end = _optional_date("end_date", end_date) or now + DEFAULT_EVENT_WINDOW
        count = _at_least("limit", limit, DEFAULT_EVENT_LIMIT)
        return self._events_between(start, end, calendar=calendar or None, limit=count)

    def search_events(
        self,
        query: str,
        *,
        calendar: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[CalendarEvent]:
        count = _at_least("limit", limit, DEFAULT_SEARCH_LIMIT)
        now = self.context.now()
        script = scripts.search_events_script(query, now, now + SEARCH_WINDOW, calendar=calendar or None, limit=count)
        matches = [event for event in parse_events(self._run(script)) if event.matches(query)]
        return matches[:count]

    def get_today_events(self) -> List[CalendarEvent]:
        start, end = day_window(self.context.now().date())
        return self._events_between(start, end)

    def get_upcoming_events(self, days: Optional[int] = None) -> List[CalendarEvent]:
        span = _at_least("days", days, DEFAULT_UPCOMING_DAYS)
        now = self.context.now()
        return self._events_between(now, now + timedelta(days=span))

    # Event mutations -----------------------------------------------------
    def _create(
        self,
        *,
        summary: str,
        start_date: str,
        end_date: Optional[str],
        all_day: Optional[bool],
        calendar: Optional[str],
        description: Optional[str],
        location: Optional[str],
        url: Optional[str],
        recurrence: Optional[str] = None,
    ) -> str:
        start = _require_date("start_date", start_date)
        all_day = bool(all_day)
        end = _optional_date("end_date", end_date) or start + (timedelta(days=1) if all_day else timedelta(hours=1))
        script = scripts.create_event_script(
            summary=summary,
            start=start,
            end=end,
            all_day=all_day,
            calendar=calendar or None,
            description=description,
            location=location,
            url=url,
            recurrence=recurrence,
        )
        event_id = scalar_text(self._run(script))
        logger.info("Created event %s in %s", event_id, calendar or "first calendar")
        return event_id

    def create_event(
        self,
        *,
        summary: str,
        start_date: str,
        end_date: Optional[str] = None,
        all_day: Optional[bool] = None,
        calendar: Optional[str] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        url: Optional[str] = None,
    ) -> str:
        return self._create(
            summary=summary,
            start_date=start_date,
            end_date=end_date,
            all_day=all_day,
            calendar=calendar,
            description=description,
            location=location,
            url=url,
        )

    def create_recurring_event(
        self,
        *,
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
    ) -> Tuple[str, str]:
        cadence = _frequency(frequency)
        every = _at_least("interval", interval, 1)
        until_dt = _optional_date("until", until)
        if count is not None and until_dt is not None:
            raise ToolValidationError("count and until cannot be combined", fields=("count", "until"))
        if count is not None:
            _at_least("count", count, 1)
        rule = build_rule(cadence, interval=every, count=count, until=until_dt)
        event_id = self._create(
            summary=summary,
            start_date=start_date,
            end_date=end_date,
            all_day=all_day,
            calendar=calendar,
            description=description,
            location=location,
            url=None,
            recurrence=rule,
        )
        return event_id, rule

    def update_event(
        self,
        event_id: str,
        calendar: str,
        *,
        summary: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        all_day: Optional[bool] = None,
    ) -> None:
        script = scripts.update_event_script(
            event_id,
            calendar,
            summary=summary,
            start=_optional_date("start_date", start_date),
            end=_optional_date("end_date", end_date),
            description=description,
            location=location,
            all_day=all_day,
        )
        if script is None:
            raise ToolValidationError(
                f"No updates provided; supply at least one of {', '.join(UPDATABLE_FIELDS)}",
                fields=UPDATABLE_FIELDS,
            )
        self._run(script)
        logger.info("Updated event %s in %s", event_id, calendar)

    def delete_event(self, event_id: str, calendar: str) -> None:
        self._run(scripts.delete_event_script(event_id, calendar))
        logger.info("Deleted event %s from %s", event_id, calendar)

    # Availability --------------------------------------------------------
    def find_free_time(
        self,
        day: str,
        duration_minutes: int,
        *,
        start_hour: Optional[int] = None,
        end_hour: Optional[int] = None,
        calendar: Optional[str] = None,
    ) -> List[FreeSlot]:
        target = parse_day(day)
        if target is None:
            raise ToolValidationError.invalid("date", f"{day!r} is not an ISO 8601 date")
        minutes = _at_least("duration_minutes", duration_minutes, 1)
        defaults = self.context.settings.availability
        first_hour = defaults.workday_start_hour if start_hour is None else start_hour
        last_hour = defaults.workday_end_hour if end_hour is None else end_hour
        if not 0 <= first_hour < last_hour <= 24:
            raise ToolValidationError(
                "start_hour and end_hour must satisfy 0 <= start_hour < end_hour <= 24",
                fields=("start_hour", "end_hour"),
            )

        day_start, day_end = day_window(target)
        window_start = local_hour(target, first_hour)
        window_end = local_hour(target, last_hour)
        events = self._events_between(
            day_start,
            day_end,
            calendar=calendar or None,
            limit=DAY_EVENT_LIMIT,
            overlapping=True,
        )
        busy = []
        for event in events:
            if event.all_day:
                continue
            start, end = parse_date(event.start_date), parse_date(event.end_date)
            if start is not None and end is not None:
                busy.append((start, end))
        return find_free_slots(busy, window_start, window_end, minutes)

    # Calendar app --------------------------------------------------------
    def open_calendar(self) -> None:
        self._run(scripts.open_calendar_script())

    def open_date(self, day: str) -> date:
        target = parse_day(day)
        if target is None:
            raise ToolValidationError.invalid("date", f"{day!r} is not an ISO 8601 date")
        self._run(scripts.open_date_script(local_midnight(target)))
        return target
