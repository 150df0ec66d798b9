"""Decode the text ``osascript`` prints back into Python values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Union

import orjson

from ..domain import Calendar, CalendarEvent
from .dates import parse_date
from .errors import ScriptExecutionError


@dataclass(frozen=True, slots=True)
class StructuredOutput:
    value: Any


@dataclass(frozen=True, slots=True)
class OpaqueOutput:
    text: str


ScriptOutput = Union[StructuredOutput, OpaqueOutput]


def decode_output(raw: str) -> ScriptOutput:
    """Classify host output as JSON or as an opaque scalar string.

    Empty output is an empty result set. Only text that opens like a JSON
    array or object is decoded, so bare identifiers stay strings.
    """

    text = raw.strip()
    if not text:
        return StructuredOutput([])
    if text[0] not in "[{":
        return OpaqueOutput(text)
    try:
        return StructuredOutput(orjson.loads(text))
    except orjson.JSONDecodeError:
        return OpaqueOutput(text)


def _records(output: ScriptOutput) -> List[dict]:
    if isinstance(output, OpaqueOutput):
        raise ScriptExecutionError(f"Unexpected output from Calendar: {output.text[:200]}")
    value = output.value
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise ScriptExecutionError("Unexpected output from Calendar: expected a list")
    return [item for item in value if isinstance(item, dict)]


def _start_key(event: CalendarEvent) -> tuple[int, float]:
    instant = parse_date(event.start_date)
    if instant is None:
        return (1, 0.0)
    return (0, instant.timestamp())


def sort_events(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    """Order by start instant; undated events trail. Ties keep input order."""

    return sorted(events, key=_start_key)


def parse_events(raw: str) -> List[CalendarEvent]:
    return sort_events(CalendarEvent.from_record(record) for record in _records(decode_output(raw)))


def parse_calendars(raw: str) -> List[Calendar]:
    return [Calendar.from_record(record) for record in _records(decode_output(raw))]


def scalar_text(raw: str) -> str:
    """Return a single scalar result such as a new event uid."""

    output = decode_output(raw)
    if isinstance(output, OpaqueOutput):
        return output.text
    if isinstance(output.value, (str, int, float)) and not isinstance(output.value, bool):
        return str(output.value)
    raise ScriptExecutionError("Calendar returned no value")
