from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import (
    TimezoneLike,
    ensure_utc,
    start_of_day,
    start_of_month,
    start_of_week,
)
from ..common.duration import cap_duration
from ..core.constants import (
    DEFAULT_STANDARD_WORKDAY_HOURS,
    DEFAULT_TIMEZONE,
    MAX_ACTIVE_INTERVAL_SECONDS,
    MAX_BREAK_INTERVAL_SECONDS,
    SECONDS_PER_HOUR,
)
from ..events.model import LastActivity
from ..periods.model import TimeInterval
from .model import AttendanceMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntervalCaps:
    active_seconds: int = MAX_ACTIVE_INTERVAL_SECONDS
    break_seconds: int = MAX_BREAK_INTERVAL_SECONDS


@dataclass(frozen=True)
class _Total:
    seconds: int = 0
    capped: int = 0


def sum_capped(periods: Iterable[TimeInterval], max_seconds: int) -> _Total:
    seconds = 0
    capped = 0
    for period in periods:
        d = cap_duration(period.start, period.end, max_seconds)
        if d.was_capped:
            capped += 1
            logger.warning(
                "Capped interval %s -> %s from %ss to %ss",
                period.start.isoformat(),
                period.end.isoformat(),
                d.original_seconds,
                d.duration_seconds,
            )
        seconds += d.duration_seconds
    return _Total(seconds=seconds, capped=capped)


def clip_periods(periods: Iterable[TimeInterval], window_start: datetime, window_end: datetime) -> list[TimeInterval]:
    """Parts of ``periods`` inside ``[window_start, window_end]``; empty parts dropped."""
    window_start = ensure_utc(window_start)
    window_end = ensure_utc(window_end)
    clipped = []
    for period in periods:
        start = max(ensure_utc(period.start), window_start)
        end = min(ensure_utc(period.end), window_end)
        if end > start:
            clipped.append(TimeInterval(start=start, end=end))
    return clipped


def periods_since(periods: Iterable[TimeInterval], since: datetime) -> list[TimeInterval]:
    """Periods still running at or after ``since``, kept whole."""
    since = ensure_utc(since)
    return [p for p in periods if ensure_utc(p.end) > since]


def time_in_window(periods: Iterable[TimeInterval], window_start: datetime, now: datetime, max_seconds: int) -> int:
    """Seconds of ``periods`` inside ``[window_start, now]``, capped per interval."""
    return sum(
        cap_duration(p.start, p.end, max_seconds).duration_seconds
        for p in clip_periods(periods, window_start, now)
    )


def aggregate_metrics(
    active_periods: Iterable[TimeInterval],
    break_periods: Iterable[TimeInterval],
    now: datetime,
    standard_workday_seconds: int = DEFAULT_STANDARD_WORKDAY_HOURS * SECONDS_PER_HOUR,
    *,
    timezone: TimezoneLike = DEFAULT_TIMEZONE,
    user_id: Optional[str] = None,
    is_active: bool = False,
    is_on_break: bool = False,
    last_activity: Optional[LastActivity] = None,
    caps: IntervalCaps = IntervalCaps(),
    workday_start: Optional[datetime] = None,
) -> AttendanceMetrics:
    """Sum interval durations into work, break, overtime and window totals.

    Work and break totals cover every given interval, or only the intervals
    still running at ``workday_start`` or later when one is given. A session
    open across midnight counts from its own start. Week starts on the most recent
    wall-clock Sunday and month on the 1st, both at 00:00 in ``timezone``.
    Window totals count active periods only.
    """
    active_periods = tuple(active_periods)
    break_periods = tuple(break_periods)
    now = ensure_utc(now)

    counted_active = active_periods
    counted_breaks = break_periods
    if workday_start is not None:
        counted_active = periods_since(active_periods, workday_start)
        counted_breaks = periods_since(break_periods, workday_start)

    work = sum_capped(counted_active, caps.active_seconds)
    rest = sum_capped(counted_breaks, caps.break_seconds)
    overtime = max(0, work.seconds - int(standard_workday_seconds))

    day_time = time_in_window(active_periods, start_of_day(now, timezone), now, caps.active_seconds)
    week_time = time_in_window(active_periods, start_of_week(now, timezone), now, caps.active_seconds)
    month_time = time_in_window(active_periods, start_of_month(now, timezone), now, caps.active_seconds)

    capped = work.capped + rest.capped
    logger.debug(
        "Metrics for user %s: work=%ss break=%ss overtime=%ss active=%s on_break=%s",
        user_id,
        work.seconds,
        rest.seconds,
        overtime,
        is_active,
        is_on_break,
    )
    return AttendanceMetrics(
        user_id=user_id,
        work_time_seconds=work.seconds,
        break_time_seconds=rest.seconds,
        overtime_seconds=overtime,
        is_active=is_active,
        is_on_break=is_on_break,
        last_activity=last_activity,
        week_time_seconds=week_time,
        month_time_seconds=month_time,
        day_time_seconds=day_time,
        was_capped=capped > 0,
        capped_intervals=capped,
    )
