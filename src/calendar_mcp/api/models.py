from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.dates import to_iso
from ..domain import Calendar, CalendarEvent, FreeSlot, PermissionStatus


class CalendarPayload(BaseModel):
    id: str
    name: str
    color: str = Field(default="")
    writable: bool = Field(default=False)

    @classmethod
    def from_domain(cls, calendar: Calendar) -> "CalendarPayload":
        return cls(id=calendar.id, name=calendar.name, color=calendar.color, writable=calendar.writable)


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    summary: str
    description: str = Field(default="")
    location: str = Field(default="")
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    all_day: bool = Field(default=False, alias="allDay")
    calendar: str = Field(default="")
    url: str = Field(default="")
    status: str = Field(default="")

    @classmethod
    def from_domain(cls, event: CalendarEvent) -> "EventPayload":
        return cls(
            id=event.id,
            summary=event.summary,
            description=event.description,
            location=event.location,
            start_date=event.start_date,
            end_date=event.end_date,
            all_day=event.all_day,
            calendar=event.calendar,
            url=event.url,
            status=event.status,
        )


class PermissionPayload(BaseModel):
    calendar: bool
    details: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, status: PermissionStatus) -> "PermissionPayload":
        return cls(calendar=status.calendar, details=list(status.details))


class FreeSlotPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: str
    end: str
    duration_minutes: int = Field(alias="durationMinutes")

    @classmethod
    def from_domain(cls, slot: FreeSlot) -> "FreeSlotPayload":
        return cls(start=to_iso(slot.start), end=to_iso(slot.end), duration_minutes=slot.duration_minutes)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Envelope returned for every tool call, successful or not."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: Optional[bool] = Field(default=None, alias="isError")

    @classmethod
    def success(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def failure(cls, message: str) -> "ToolResponse":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        return "".join(block.text for block in self.content)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
