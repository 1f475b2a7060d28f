from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AdherenceStatus
from .base import AdherenceDecision, AdherenceStrategy, ShiftWindow


class AbsentStrategy(AdherenceStrategy):
    """No sign-in and the grace period is over (pending explicit marking)."""

    def decide(self, *, first_signin: Optional[datetime], window: Optional[ShiftWindow], now: datetime) -> AdherenceDecision:
        minutes_late = int((now - window.shift_start).total_seconds() // 60)
        return AdherenceDecision(
            status=AdherenceStatus.ABSENT,
            note="No sign-in after the grace period",
            minutes_late=minutes_late,
        )


class NotSetStrategy(AdherenceStrategy):
    """No schedule, or the shift has not started yet."""

    def decide(self, *, first_signin: Optional[datetime], window: Optional[ShiftWindow], now: datetime) -> AdherenceDecision:
        note = "No shift schedule" if window is None else None
        return AdherenceDecision(status=AdherenceStatus.NOT_SET, note=note)
