"""Shared pytest fixtures for calendar-mcp tests.

No test runs ``osascript``: services are wired to a fake runner that records
the scripts it receives and replays queued output.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import List, Optional

import orjson
import pytest

from calendar_mcp.api import api_state
from calendar_mcp.services import CalendarService, ServiceContext

FIXED_NOW = datetime(2025, 1, 15, 8, 0).astimezone()

MOCK_CALENDARS = [
    {"id": "cal-1", "name": "Work", "color": "0,0,65535", "writable": True},
    {"id": "cal-2", "name": "Personal", "color": "0,65535,0", "writable": True},
    {"id": "cal-3", "name": "Holidays", "color": "65535,0,0", "writable": False},
]

MOCK_EVENTS = [
    {
        "id": "event-2",
        "summary": "Lunch with John",
        "description": "",
        "location": "Cafe",
        "startDate": "2025-01-15T12:00:00.000Z",
        "endDate": "2025-01-15T13:00:00.000Z",
        "allDay": False,
        "calendar": "Personal",
        "url": "",
        "status": "confirmed",
    },
    {
        "id": "event-1",
        "summary": "Team Meeting",
        "description": "Weekly sync",
        "location": "Conference Room A",
        "startDate": "2025-01-15T10:00:00.000Z",
        "endDate": "2025-01-15T11:00:00.000Z",
        "allDay": False,
        "calendar": "Work",
        "url": "",
        "status": "confirmed",
    },
]


def as_json(records) -> str:
    return orjson.dumps(records).decode("utf-8")


class FakeRunner:
    """Stands in for ScriptRunner; records scripts and replays queued output."""

    def __init__(self) -> None:
        self.scripts: List[str] = []
        self.outputs: List[str] = []
        self.error: Optional[Exception] = None

    def queue(self, *outputs: str) -> None:
        self.outputs.extend(outputs)

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def run(self, script: str) -> str:
        self.scripts.append(script)
        if self.error is not None:
            raise self.error
        return self.outputs.pop(0) if self.outputs else ""


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def context(runner: FakeRunner) -> ServiceContext:
    return ServiceContext(runner=runner, clock=lambda: FIXED_NOW)


@pytest.fixture
def service(context: ServiceContext) -> CalendarService:
    return CalendarService(context)


@pytest.fixture
def bound_api(context: ServiceContext):
    """Point the tool endpoints at the fake runner for the duration of a test."""

    previous = api_state.context
    api_state.use_context(context)
    yield api_state
    api_state.use_context(previous)


@pytest.fixture
def new_york_time(monkeypatch):
    """Run a test with the process local time zone set to America/New_York."""

    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
