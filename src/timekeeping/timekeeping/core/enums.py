from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Loại sự kiện chấm công (punch event)."""

    SIGNIN = "signin"
    SIGNOUT = "signout"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class ActivityState(str, Enum):
    """Trạng thái hiện tại của người dùng sau khi duyệt hết sự kiện."""

    OFF = "off"
    ACTIVE = "active"
    ON_BREAK = "on_break"


class AdherenceStatus(str, Enum):
    """Mức độ tuân thủ giờ vào ca của một người dùng trong một ngày."""

    EARLY = "early"
    ON_TIME = "on_time"
    LATE = "late"
    ABSENT = "absent"
    NOT_SET = "not_set"


class DiagnosticCode(str, Enum):
    """Mã cảnh báo dữ liệu (không làm dừng tính toán), trả về kèm kết quả."""

    MALFORMED_TIMESTAMP = "malformed_timestamp"
    UNKNOWN_EVENT_TYPE = "unknown_event_type"
    DOUBLE_SIGNIN = "double_signin"
    ORPHAN_SIGNOUT = "orphan_signout"
    ORPHAN_BREAK_START = "orphan_break_start"
    ORPHAN_BREAK_END = "orphan_break_end"
    DOUBLE_BREAK_START = "double_break_start"
    SIGNIN_DURING_BREAK = "signin_during_break"
    EVENT_AFTER_NOW = "event_after_now"
    INTERVAL_CAPPED = "interval_capped"
