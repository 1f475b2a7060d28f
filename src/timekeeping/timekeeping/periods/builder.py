from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from ..common.datetime_utils import TimezoneLike, ensure_utc, get_timezone
from ..core.enums import ActivityState, DiagnosticCode
from ..events.model import Diagnostic, LastActivity
from ..events.normalizer import RawEvent, normalize_events
from .model import PeriodBuildResult, PeriodState, TimeInterval
from .state_machine import close_open, transition

logger = logging.getLogger(__name__)


def _until(interval: TimeInterval, now: datetime) -> TimeInterval:
    if interval.end <= now:
        return interval
    return TimeInterval(start=interval.start, end=max(interval.start, now))


def build_periods(events: Iterable[RawEvent], timezone: TimezoneLike, now: datetime) -> PeriodBuildResult:
    """Turn one user's punch events into active and break intervals.

    Events are re-sorted by timestamp; malformed ones are skipped with a
    diagnostic. An interval still open after the last event is closed at
    ``now``, so a signed-in user's running total grows with ``now``. Events
    after ``now`` are reported and every interval is cut off at ``now``.
    Intervals crossing midnight are kept whole; windowing happens when
    aggregating.
    """
    get_timezone(timezone)
    now = ensure_utc(now)

    ordered, diagnostics = normalize_events(events)
    active: list[TimeInterval] = []
    breaks: list[TimeInterval] = []
    orphans: list[TimeInterval] = []

    state = PeriodState.off()
    for event in ordered:
        step = transition(state, event)
        state = step.state
        if step.active is not None:
            active.append(_until(step.active, now))
        if step.break_ is not None:
            breaks.append(_until(step.break_, now))
        if step.orphan is not None:
            orphans.append(step.orphan)
        if step.anomaly is not None:
            logger.warning("user=%s %s", event.user_id, step.anomaly.message)
            diagnostics.append(step.anomaly)

    future = [e for e in ordered if e.timestamp > now]
    if future:
        message = f"{len(future)} event(s) after evaluation time {now.isoformat()}; intervals cut off at now"
        logger.warning("user=%s %s", future[0].user_id, message)
        diagnostics.append(Diagnostic(code=DiagnosticCode.EVENT_AFTER_NOW, message=message, event_id=future[0].id))

    open_active, open_break = close_open(state, now)
    if open_active is not None:
        active.append(open_active)
    if open_break is not None:
        breaks.append(open_break)

    last_activity = LastActivity.from_event(ordered[-1]) if ordered else None

    logger.debug(
        "Built %d active / %d break periods, final state %s",
        len(active),
        len(breaks),
        state.activity.value,
    )
    return PeriodBuildResult(
        active_periods=tuple(active),
        break_periods=tuple(breaks),
        orphans=tuple(orphans),
        is_active=state.activity == ActivityState.ACTIVE,
        is_on_break=state.activity == ActivityState.ON_BREAK,
        last_activity=last_activity,
        diagnostics=tuple(diagnostics),
    )
