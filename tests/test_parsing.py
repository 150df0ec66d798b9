"""Tests for decoding osascript output."""

import pytest

from calendar_mcp.core.errors import ScriptExecutionError
from calendar_mcp.core.parsing import (
    OpaqueOutput,
    StructuredOutput,
    decode_output,
    parse_calendars,
    parse_events,
    scalar_text,
)
from conftest import MOCK_CALENDARS, MOCK_EVENTS, as_json


def _event(event_id: str, start: str) -> dict:
    return {"id": event_id, "summary": event_id, "startDate": start, "endDate": start}


class TestDecodeOutput:
    def test_empty_output_is_empty_list(self) -> None:
        assert decode_output("") == StructuredOutput([])
        assert decode_output("   \n") == StructuredOutput([])

    def test_json_array(self) -> None:
        assert decode_output('[{"id": "a"}]') == StructuredOutput([{"id": "a"}])

    def test_identifier_stays_opaque(self) -> None:
        assert decode_output("ABC-123@example.com") == OpaqueOutput("ABC-123@example.com")
        assert decode_output("12345") == OpaqueOutput("12345")

    def test_malformed_json_falls_back_to_text(self) -> None:
        assert decode_output('[{"id":') == OpaqueOutput('[{"id":')

    def test_opaque_text_is_stripped(self) -> None:
        assert decode_output(' [{"id": \n') == OpaqueOutput('[{"id":')
        assert decode_output("  ABC-123\n") == OpaqueOutput("ABC-123")


class TestParseEvents:
    def test_sorted_by_start_with_normalized_dates(self) -> None:
        events = parse_events(as_json(MOCK_EVENTS))
        assert [event.summary for event in events] == ["Team Meeting", "Lunch with John"]
        assert events[0].start_date == "2025-01-15T10:00:00.000Z"
        assert events[0].calendar == "Work"
        assert events[0].all_day is False

    def test_ties_keep_input_order(self) -> None:
        records = [
            _event("late", "2025-01-16T09:00:00Z"),
            _event("first", "2025-01-15T09:00:00Z"),
            _event("second", "2025-01-15T09:00:00.000Z"),
            _event("third", "2025-01-15T10:00:00+01:00"),
        ]
        events = parse_events(as_json(records))
        assert [event.id for event in events] == ["first", "second", "third", "late"]

    def test_missing_values_are_normalized(self) -> None:
        records = [
            {"id": "x", "summary": "Undated", "startDate": "missing value", "endDate": "", "description": "missing value"},
            _event("dated", "2025-01-15T09:00:00Z"),
        ]
        events = parse_events(as_json(records))
        assert [event.id for event in events] == ["dated", "x"]
        assert events[1].start_date == ""
        assert events[1].description == ""

    def test_empty_output_is_no_events(self) -> None:
        assert parse_events("") == []

    def test_unexpected_text_is_an_error(self) -> None:
        with pytest.raises(ScriptExecutionError):
            parse_events("Calendar got an error")


class TestParseCalendars:
    def test_colors_and_flags(self) -> None:
        calendars = parse_calendars(as_json(MOCK_CALENDARS))
        assert [calendar.name for calendar in calendars] == ["Work", "Personal", "Holidays"]
        assert calendars[0].color == "#0000ff"
        assert calendars[2].color == "#ff0000"
        assert calendars[2].writable is False

    def test_unrecognized_color_is_kept(self) -> None:
        calendars = parse_calendars(as_json([{"id": "c", "name": "C", "color": "blue", "writable": "true"}]))
        assert calendars[0].color == "blue"
        assert calendars[0].writable is True


class TestScalarText:
    def test_identifier(self) -> None:
        assert scalar_text("E1B2-C3D4") == "E1B2-C3D4"

    def test_empty_output_is_an_error(self) -> None:
        with pytest.raises(ScriptExecutionError):
            scalar_text("")
