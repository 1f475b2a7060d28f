from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..events.model import Diagnostic, LastActivity


@dataclass(frozen=True)
class AttendanceMetrics:
    """Derived view recomputed on every call; never the system of record."""

    user_id: Optional[str]
    work_time_seconds: int
    break_time_seconds: int
    overtime_seconds: int
    is_active: bool
    is_on_break: bool
    last_activity: Optional[LastActivity]
    week_time_seconds: int
    month_time_seconds: int
    day_time_seconds: int = 0
    was_capped: bool = False
    capped_intervals: int = 0


@dataclass(frozen=True)
class UserMetricsResult:
    metrics: AttendanceMetrics
    diagnostics: tuple[Diagnostic, ...] = ()
