from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import EARLY_MARGIN_MINUTES
from .strategies.absent_strategy import AbsentStrategy, NotSetStrategy
from .strategies.base import AdherenceStrategy, ShiftWindow
from .strategies.early_strategy import EarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import OnTimeStrategy


@dataclass
class AdherenceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    early_margin_minutes: int = EARLY_MARGIN_MINUTES

    def for_day(self, *, first_signin: Optional[datetime], window: Optional[ShiftWindow], now: datetime) -> AdherenceStrategy:
        if window is None:
            return NotSetStrategy()

        if first_signin is None:
            if now > window.grace_end:
                return AbsentStrategy()
            return NotSetStrategy()

        if first_signin <= window.shift_start - timedelta(minutes=self.early_margin_minutes):
            return EarlyStrategy()
        if first_signin <= window.grace_end:
            return OnTimeStrategy()
        return LateStrategy()
