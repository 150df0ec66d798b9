from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..config import AppSettings, get_settings
from ..core.runner import ScriptRunner


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(slots=True)
class ServiceContext:
    """Shared settings, script runner and clock for the calendar service."""

    settings: AppSettings = field(default_factory=get_settings)
    runner: Optional[ScriptRunner] = None
    clock: Callable[[], datetime] = _local_now

    def __post_init__(self) -> None:
        if self.runner is None:
            self.runner = ScriptRunner(self.settings.script)

    def now(self) -> datetime:
        return self.clock()
