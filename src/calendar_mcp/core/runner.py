from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from ..config import ScriptSettings, get_settings
from .errors import CalendarAccessDenied, ScriptExecutionError

logger = logging.getLogger(__name__)

NOT_AUTHORIZED_SIGNALS = ("Not authorized", "-1743")


@dataclass(slots=True)
class ScriptRunner:
    """Run AppleScript through ``osascript`` and return its stripped stdout."""

    settings: Optional[ScriptSettings] = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings().script

    def run(self, script: str) -> str:
        settings = self.settings
        logger.debug("Running AppleScript (%d chars)", len(script))
        try:
            result = subprocess.run(
                [settings.osascript, "-e", script],
                capture_output=True,
                text=True,
                timeout=settings.timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("AppleScript timed out after %.1fs", settings.timeout_seconds)
            raise ScriptExecutionError(f"AppleScript timed out after {settings.timeout_seconds:g} seconds") from exc
        except FileNotFoundError as exc:
            raise ScriptExecutionError(f"{settings.osascript} not found; Calendar automation requires macOS") from exc
        except OSError as exc:
            raise ScriptExecutionError(f"Could not start {settings.osascript}: {exc}") from exc

        if result.returncode != 0:
            message = (result.stderr or result.stdout or "").strip() or f"osascript exited with status {result.returncode}"
            if any(signal in message for signal in NOT_AUTHORIZED_SIGNALS):
                logger.warning("Calendar automation not authorized: %s", message)
                raise CalendarAccessDenied()
            logger.warning("AppleScript failed (rc=%s): %s", result.returncode, message)
            raise ScriptExecutionError(message)

        output = result.stdout or ""
        if len(output.encode("utf-8")) > settings.max_output_bytes:
            raise ScriptExecutionError(f"AppleScript output exceeded {settings.max_output_bytes} bytes")
        return output.strip()
