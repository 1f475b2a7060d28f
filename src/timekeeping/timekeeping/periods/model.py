from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import ActivityState
from ..events.model import Diagnostic, LastActivity


@dataclass(frozen=True)
class TimeInterval:
    """Closed span ``[start, end]``; ``end >= start``."""

    start: datetime
    end: datetime

    @property
    def seconds(self) -> int:
        return max(int((self.end - self.start).total_seconds()), 0)


@dataclass(frozen=True)
class PeriodState:
    """Builder state: the current activity and when it was opened."""

    activity: ActivityState = ActivityState.OFF
    since: Optional[datetime] = None

    @classmethod
    def off(cls) -> "PeriodState":
        return cls()

    @classmethod
    def active(cls, since: datetime) -> "PeriodState":
        return cls(activity=ActivityState.ACTIVE, since=since)

    @classmethod
    def on_break(cls, since: datetime) -> "PeriodState":
        return cls(activity=ActivityState.ON_BREAK, since=since)


@dataclass(frozen=True)
class Transition:
    """Outcome of feeding one event to the state machine."""

    state: PeriodState
    active: Optional[TimeInterval] = None
    break_: Optional[TimeInterval] = None
    orphan: Optional[TimeInterval] = None
    anomaly: Optional[Diagnostic] = None


@dataclass(frozen=True)
class PeriodBuildResult:
    active_periods: tuple[TimeInterval, ...] = ()
    break_periods: tuple[TimeInterval, ...] = ()
    orphans: tuple[TimeInterval, ...] = ()
    is_active: bool = False
    is_on_break: bool = False
    last_activity: Optional[LastActivity] = None
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def state(self) -> ActivityState:
        if self.is_on_break:
            return ActivityState.ON_BREAK
        if self.is_active:
            return ActivityState.ACTIVE
        return ActivityState.OFF
