from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from ..core.enums import AdherenceStatus

_PRESENT = (AdherenceStatus.EARLY, AdherenceStatus.ON_TIME, AdherenceStatus.LATE)


@dataclass(frozen=True)
class AdherenceCounts:
    """Per-status adherence counts for one day."""

    counts: dict[AdherenceStatus, int]

    def get(self, status: AdherenceStatus) -> int:
        return self.counts.get(status, 0)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def present(self) -> int:
        return sum(self.get(s) for s in _PRESENT)

    @property
    def attendance_rate(self) -> float:
        """Present share (percent) of users with a determined status."""
        decided = self.present + self.get(AdherenceStatus.ABSENT)
        if not decided:
            return 0.0
        return round(self.present * 100.0 / decided, 1)

    @property
    def punctuality_rate(self) -> float:
        if not self.present:
            return 0.0
        on_time = self.get(AdherenceStatus.EARLY) + self.get(AdherenceStatus.ON_TIME)
        return round(on_time * 100.0 / self.present, 1)


def count_by_status(statuses: Iterable[AdherenceStatus]) -> AdherenceCounts:
    tally = Counter(AdherenceStatus(s) for s in statuses)
    return AdherenceCounts(counts={s: tally.get(s, 0) for s in AdherenceStatus})
