from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AdherenceStatus
from .base import AdherenceDecision, AdherenceStrategy, ShiftWindow


class OnTimeStrategy(AdherenceStrategy):
    """Sign-in within the grace period."""

    def decide(self, *, first_signin: Optional[datetime], window: Optional[ShiftWindow], now: datetime) -> AdherenceDecision:
        return AdherenceDecision(status=AdherenceStatus.ON_TIME)
