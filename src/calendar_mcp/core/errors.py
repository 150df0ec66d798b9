from __future__ import annotations

from typing import Iterable

ACCESS_DENIED_MESSAGE = (
    "Calendar access denied. Grant permission in System Settings > Privacy & Security > Calendars"
)


class CalendarMcpError(Exception):
    """Base class for every failure the tool dispatcher reports to callers."""


class ToolValidationError(CalendarMcpError, ValueError):
    """Arguments were rejected before any script was executed."""

    def __init__(self, message: str, *, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)

    @classmethod
    def missing(cls, fields: Iterable[str]) -> "ToolValidationError":
        names = list(fields)
        noun = "argument" if len(names) == 1 else "arguments"
        return cls(f"Missing required {noun}: {', '.join(names)}", fields=names)

    @classmethod
    def invalid(cls, field: str, reason: str) -> "ToolValidationError":
        return cls(f"Invalid {field}: {reason}", fields=(field,))


class UnknownToolError(CalendarMcpError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ScriptExecutionError(CalendarMcpError, RuntimeError):
    """The automation bridge failed; the message is the host's own."""


class CalendarAccessDenied(ScriptExecutionError):
    def __init__(self, message: str = ACCESS_DENIED_MESSAGE) -> None:
        super().__init__(message)
