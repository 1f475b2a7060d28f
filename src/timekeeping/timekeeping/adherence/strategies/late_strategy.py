from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AdherenceStatus
from .base import AdherenceDecision, AdherenceStrategy, ShiftWindow


class LateStrategy(AdherenceStrategy):
    """Sign-in after the grace period."""

    def decide(self, *, first_signin: Optional[datetime], window: Optional[ShiftWindow], now: datetime) -> AdherenceDecision:
        minutes_late = int((first_signin - window.shift_start).total_seconds() // 60)
        return AdherenceDecision(
            status=AdherenceStatus.LATE,
            note=f"Signed in {minutes_late} min after shift start",
            minutes_late=minutes_late,
        )
