from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AdherenceStatus
from .base import AdherenceDecision, AdherenceStrategy, ShiftWindow


class EarlyStrategy(AdherenceStrategy):
    """Sign-in at or before shift start."""

    def decide(self, *, first_signin: Optional[datetime], window: Optional[ShiftWindow], now: datetime) -> AdherenceDecision:
        minutes_early = int((window.shift_start - first_signin).total_seconds() // 60)
        return AdherenceDecision(status=AdherenceStatus.EARLY, note=f"Signed in {minutes_early} min before shift start")
