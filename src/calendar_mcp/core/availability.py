from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Tuple

from ..domain import FreeSlot

Interval = Tuple[datetime, datetime]


def merge_busy(busy: Iterable[Interval], window_start: datetime, window_end: datetime) -> List[Interval]:
    """Clip busy intervals to the window and merge overlapping ones."""

    clipped = sorted(
        (max(start, window_start), min(end, window_end))
        for start, end in busy
        if end > window_start and start < window_end and end > start
    )
    merged: List[Interval] = []
    for start, end in clipped:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def find_free_slots(
    busy: Iterable[Interval],
    window_start: datetime,
    window_end: datetime,
    minutes: int,
) -> List[FreeSlot]:
    """Return the gaps in ``[window_start, window_end)`` lasting at least ``minutes``."""

    target = timedelta(minutes=minutes)
    slots: List[FreeSlot] = []
    cursor = window_start
    for start, end in merge_busy(busy, window_start, window_end):
        if start - cursor >= target:
            slots.append(FreeSlot(start=cursor, end=start))
        cursor = max(cursor, end)
    if window_end - cursor >= target:
        slots.append(FreeSlot(start=cursor, end=window_end))
    return slots
