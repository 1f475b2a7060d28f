from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AdherenceStatus


@dataclass(frozen=True)
class ShiftWindow:
    """Shift start and grace end as UTC instants on one work date."""

    shift_start: datetime
    grace_end: datetime


@dataclass(frozen=True)
class AdherenceDecision:
    status: AdherenceStatus
    note: Optional[str] = None
    minutes_late: int = 0


class AdherenceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an adherence status."""

    @abstractmethod
    def decide(self, *, first_signin: Optional[datetime], window: Optional[ShiftWindow], now: datetime) -> AdherenceDecision:
        raise NotImplementedError
