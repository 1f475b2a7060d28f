from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .datetime_utils import ensure_utc


@dataclass(frozen=True)
class CappedDuration:
    duration_seconds: int
    was_capped: bool
    original_seconds: int = 0


def cap_duration(start: datetime, end: datetime, max_seconds: int) -> CappedDuration:
    """Clamp the length of ``[start, end]`` to ``max_seconds``.

    A missing sign-out or a skewed clock can produce intervals spanning days;
    this is the single guard against them and is applied per interval.
    """
    start = ensure_utc(start)
    end = ensure_utc(end)
    if end <= start:
        return CappedDuration(duration_seconds=0, was_capped=False)

    original = int((end - start).total_seconds())
    if original > max_seconds:
        return CappedDuration(duration_seconds=int(max_seconds), was_capped=True, original_seconds=original)
    return CappedDuration(duration_seconds=original, was_capped=False, original_seconds=original)


def format_duration(seconds: int) -> str:
    """Format seconds as ``"2h 30m"``, ``"2h"`` or ``"45m"``."""
    if not seconds or seconds <= 0:
        return "0m"
    hours, rest = divmod(int(seconds), 3600)
    minutes = rest // 60
    if hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"
