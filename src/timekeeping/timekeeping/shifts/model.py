from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.validators import parse_clock_time, require_non_negative
from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START


@dataclass(frozen=True)
class ShiftConfig:
    """Thực thể miền (domain): Ca làm việc của phòng ban (giờ vào/ra, thời gian ân hạn)."""

    start_time: time
    end_time: time
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES

    def __post_init__(self):
        object.__setattr__(self, "start_time", parse_clock_time(self.start_time, "start_time"))
        object.__setattr__(self, "end_time", parse_clock_time(self.end_time, "end_time"))
        object.__setattr__(
            self,
            "grace_period_minutes",
            require_non_negative(self.grace_period_minutes, "grace_period_minutes"),
        )

    @property
    def is_overnight(self) -> bool:
        return self.end_time < self.start_time

    @classmethod
    def default(cls) -> "ShiftConfig":
        return cls(
            start_time=parse_clock_time(DEFAULT_SHIFT_START, "start_time"),
            end_time=parse_clock_time(DEFAULT_SHIFT_END, "end_time"),
            grace_period_minutes=DEFAULT_GRACE_PERIOD_MINUTES,
        )


@dataclass(frozen=True)
class Department:
    """Phòng ban và lịch ca (có thể chưa cấu hình)."""

    dept_id: str
    dept_name: str
    shift_start_time: Optional[time] = None
    shift_end_time: Optional[time] = None
    grace_period_minutes: Optional[int] = None


def resolve_shift_config(department: Optional[Department], default: Optional[ShiftConfig] = None) -> Optional[ShiftConfig]:
    """Chọn ca làm việc áp dụng cho người dùng.

    Không có phòng ban -> ca mặc định. Phòng ban chưa có giờ ca -> None
    (không xác định được trạng thái tuân thủ).
    """
    default = default or ShiftConfig.default()
    if department is None:
        return default
    if department.shift_start_time is None or department.shift_end_time is None:
        return None

    grace = department.grace_period_minutes
    return ShiftConfig(
        start_time=department.shift_start_time,
        end_time=department.shift_end_time,
        grace_period_minutes=default.grace_period_minutes if grace is None else grace,
    )
