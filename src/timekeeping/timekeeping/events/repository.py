from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent


class EventRepository(Protocol):
    """External event store. Results are expected in ascending timestamp order."""

    def get_for_user(
        self,
        user_id: str,
        *,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError
