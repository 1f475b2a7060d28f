from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import TimezoneLike, ensure_utc, local_date
from ..core.constants import ABSENT_ELIGIBILITY_MARGIN_MINUTES, DEFAULT_TIMEZONE
from ..core.enums import AdherenceStatus
from ..shifts.model import ShiftConfig
from .classifier import shift_window


def is_eligible_for_absent(
    status: AdherenceStatus,
    now: datetime,
    shift: Optional[ShiftConfig],
    *,
    timezone: TimezoneLike = DEFAULT_TIMEZONE,
    work_date: Optional[date] = None,
    margin_minutes: int = ABSENT_ELIGIBILITY_MARGIN_MINUTES,
) -> bool:
    """Whether a manual "mark absent" is currently allowed.

    Only a late user qualifies, and only once ``now`` is past shift start plus
    grace plus ``margin_minutes``. Advisory only; the status is not changed.
    """
    if status != AdherenceStatus.LATE or shift is None:
        return False

    now = ensure_utc(now)
    work_date = work_date or local_date(now, timezone)
    window = shift_window(shift, work_date, timezone)
    return now > window.grace_end + timedelta(minutes=margin_minutes)
