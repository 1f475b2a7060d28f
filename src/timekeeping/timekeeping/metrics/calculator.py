from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..core.enums import DiagnosticCode
from ..events.model import Diagnostic
from ..events.normalizer import RawEvent
from ..periods.builder import build_periods
from ..settings import AppSettings
from .aggregator import aggregate_metrics
from .model import UserMetricsResult


def calculate_user_metrics(
    events: Iterable[RawEvent],
    now: datetime,
    *,
    user_id: Optional[str] = None,
    settings: Optional[AppSettings] = None,
    workday_start: Optional[datetime] = None,
) -> UserMetricsResult:
    """Build periods for one user and aggregate them into AttendanceMetrics.

    Pass ``workday_start`` to limit work/break/overtime to sessions still
    running that day (an overnight session counts whole) while week and
    month totals still see every event.
    """
    settings = settings or AppSettings()

    periods = build_periods(events, settings.timezone, now)
    metrics = aggregate_metrics(
        periods.active_periods,
        periods.break_periods,
        now,
        settings.standard_workday_seconds,
        timezone=settings.timezone,
        user_id=user_id,
        is_active=periods.is_active,
        is_on_break=periods.is_on_break,
        last_activity=periods.last_activity,
        caps=settings.caps,
        workday_start=workday_start,
    )

    diagnostics = list(periods.diagnostics)
    if metrics.was_capped:
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.INTERVAL_CAPPED,
                message=f"{metrics.capped_intervals} interval(s) exceeded the maximum duration and were capped",
            )
        )
    return UserMetricsResult(metrics=metrics, diagnostics=tuple(diagnostics))
