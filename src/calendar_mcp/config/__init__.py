"""Configuration helpers for calendar-mcp."""

from .settings import AppSettings, AvailabilitySettings, LoggingSettings, ScriptSettings, get_settings

__all__ = ["AppSettings", "AvailabilitySettings", "LoggingSettings", "ScriptSettings", "get_settings"]
