from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import DiagnosticCode, EventType


@dataclass(frozen=True)
class AttendanceEvent:
    """Thực thể miền (domain): Sự kiện chấm công của một người dùng."""

    id: str
    user_id: str
    event_type: EventType
    timestamp: datetime


@dataclass(frozen=True)
class LastActivity:
    """Sự kiện gần nhất của người dùng (hiển thị do phía gọi quyết định)."""

    type: EventType
    timestamp: datetime

    @classmethod
    def from_event(cls, event: AttendanceEvent) -> "LastActivity":
        return cls(type=event.event_type, timestamp=event.timestamp)


@dataclass(frozen=True)
class Diagnostic:
    """Cảnh báo dữ liệu gắn với một sự kiện (nếu có)."""

    code: DiagnosticCode
    message: str
    event_id: Optional[str] = None
