from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ..core.enums import AdherenceStatus


class AdherenceOverrideRepository(Protocol):
    def get(self, user_id: str, work_date: date) -> Optional[AdherenceStatus]:
        raise NotImplementedError

    def save(
        self,
        *,
        user_id: str,
        work_date: date,
        status: AdherenceStatus,
        marked_by: Optional[str] = None,
    ) -> None:
        """Persist an explicit status; it takes precedence over computed ones."""

        raise NotImplementedError
