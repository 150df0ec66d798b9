from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from ..config import get_settings

_INITIALIZED = False


def configure_logging(*, level: Optional[str] = None) -> None:
    """Configure application-wide logging.

    Console output goes to stderr because stdout carries the MCP stdio
    stream. A dated file handler is added under the configured log directory.
    """

    global _INITIALIZED
    if _INITIALIZED:
        return

    settings = get_settings().logging
    resolved_level = getattr(logging, (level or settings.level).upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        settings.directory.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d")
        log_path = settings.directory / f"calendar-mcp-{timestamp}.log"
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    except OSError:
        log_path = None

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=handlers,
    )

    _INITIALIZED = True
    if log_path is None:
        logging.getLogger(__name__).warning("Log directory %s is not writable; logging to stderr only", settings.directory)
    else:
        logging.getLogger(__name__).debug("Logging configured. Output file: %s", log_path)
