from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_log_dir

load_dotenv()

APP_NAME = "calendar-mcp"
APP_AUTHOR = "calendar-mcp"


@dataclass(frozen=True)
class ScriptSettings:
    osascript: str
    timeout_seconds: float
    max_output_bytes: int


@dataclass(frozen=True)
class AvailabilitySettings:
    workday_start_hour: int
    workday_end_hour: int


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    directory: Path


@dataclass(frozen=True)
class AppSettings:
    server_name: str
    script: ScriptSettings
    availability: AvailabilitySettings
    logging: LoggingSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    script = ScriptSettings(
        osascript=os.getenv("CALENDAR_MCP_OSASCRIPT", "osascript"),
        timeout_seconds=_float_from_env("CALENDAR_MCP_SCRIPT_TIMEOUT", 30.0),
        max_output_bytes=_int_from_env("CALENDAR_MCP_MAX_OUTPUT_BYTES", 10 * 1024 * 1024),
    )

    availability = AvailabilitySettings(
        workday_start_hour=_int_from_env("CALENDAR_MCP_WORKDAY_START_HOUR", 9),
        workday_end_hour=_int_from_env("CALENDAR_MCP_WORKDAY_END_HOUR", 17),
    )

    logging_settings = LoggingSettings(
        level=os.getenv("CALENDAR_MCP_LOG_LEVEL", "INFO").upper(),
        directory=Path(os.getenv("CALENDAR_MCP_LOG_DIR") or user_log_dir(APP_NAME, APP_AUTHOR)),
    )

    return AppSettings(
        server_name=os.getenv("CALENDAR_MCP_SERVER_NAME", APP_NAME),
        script=script,
        availability=availability,
        logging=logging_settings,
    )
