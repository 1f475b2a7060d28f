from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import TimezoneLike, combine_local, ensure_utc, get_timezone, local_date
from ..core.constants import DEFAULT_TIMEZONE, EARLY_MARGIN_MINUTES
from ..core.enums import AdherenceStatus, EventType
from ..events.normalizer import RawEvent, normalize_events
from ..shifts.model import ShiftConfig
from .factory import AdherenceStrategyFactory
from .strategies.base import AdherenceDecision, ShiftWindow

logger = logging.getLogger(__name__)


def shift_window(shift: ShiftConfig, work_date: date, timezone: TimezoneLike) -> ShiftWindow:
    start = combine_local(work_date, shift.start_time, timezone)
    return ShiftWindow(shift_start=start, grace_end=start + timedelta(minutes=shift.grace_period_minutes))


def first_signin(events: Iterable[RawEvent]) -> Optional[datetime]:
    ordered, _ = normalize_events(events)
    for event in ordered:
        if event.event_type == EventType.SIGNIN:
            return event.timestamp
    return None


def decide_adherence(
    today_events: Iterable[RawEvent],
    shift: Optional[ShiftConfig],
    now: datetime,
    override: Optional[AdherenceStatus] = None,
    *,
    timezone: TimezoneLike = DEFAULT_TIMEZONE,
    work_date: Optional[date] = None,
    early_margin_minutes: int = EARLY_MARGIN_MINUTES,
) -> AdherenceDecision:
    """Classify one user's arrival on ``work_date`` against ``shift``.

    ``today_events`` must already be scoped to the day by the caller. A
    persisted ``override`` (e.g. a manager marked the day absent) wins over
    the computed status. Shift boundaries are taken on ``work_date``
    (default: the wall-clock date of ``now``) in ``timezone``.
    """
    get_timezone(timezone)
    if override is not None:
        return AdherenceDecision(status=AdherenceStatus(override), note="Persisted status")

    now = ensure_utc(now)
    work_date = work_date or local_date(now, timezone)
    window = shift_window(shift, work_date, timezone) if shift is not None else None
    signin = first_signin(today_events)

    factory = AdherenceStrategyFactory(early_margin_minutes=early_margin_minutes)
    strategy = factory.for_day(first_signin=signin, window=window, now=now)
    decision = strategy.decide(first_signin=signin, window=window, now=now)

    logger.debug("Adherence for %s: %s (%s)", work_date.isoformat(), decision.status.value, decision.note)
    return decision


def classify_adherence(
    today_events: Iterable[RawEvent],
    shift: Optional[ShiftConfig],
    now: datetime,
    override: Optional[AdherenceStatus] = None,
    *,
    timezone: TimezoneLike = DEFAULT_TIMEZONE,
    work_date: Optional[date] = None,
    early_margin_minutes: int = EARLY_MARGIN_MINUTES,
) -> AdherenceStatus:
    return decide_adherence(
        today_events,
        shift,
        now,
        override,
        timezone=timezone,
        work_date=work_date,
        early_margin_minutes=early_margin_minutes,
    ).status
