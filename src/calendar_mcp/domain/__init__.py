"""Domain models for Calendar data crossing the tool boundary."""

from __future__ import annotations

from .enums import Frequency
from .models import Calendar, CalendarEvent, FreeSlot, PermissionStatus

__all__ = ["Calendar", "CalendarEvent", "FreeSlot", "Frequency", "PermissionStatus"]
