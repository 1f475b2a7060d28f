"""Ví dụ: chạy engine chấm công với kho dữ liệu trong bộ nhớ (không cần database).

Caller tự cung cấp repository; service chỉ tính toán.
"""

import logging
from datetime import date, datetime, time

import pytz

from timekeeping.container import build_container
from timekeeping.core.enums import AdherenceStatus, EventType
from timekeeping.events.model import AttendanceEvent
from timekeeping.shifts.model import Department


class ListEventRepository:
    def __init__(self, events):
        self._events = list(events)

    def get_for_user(self, user_id, *, since=None, until=None):
        return [
            e
            for e in self._events
            if e.user_id == user_id
            and (since is None or e.timestamp >= since)
            and (until is None or e.timestamp <= until)
        ]


class StaticDepartmentRepository:
    def __init__(self, department):
        self._department = department

    def get_for_user(self, user_id):
        return self._department


class DictOverrideRepository:
    def __init__(self):
        self._saved = {}

    def get(self, user_id, work_date: date):
        return self._saved.get((user_id, work_date))

    def save(self, *, user_id, work_date, status: AdherenceStatus, marked_by=None):
        self._saved[(user_id, work_date)] = status


def main():
    logging.basicConfig(level=logging.INFO)

    def at(hour, minute=0):
        return datetime(2026, 2, 4, hour, minute, tzinfo=pytz.UTC)

    events = ListEventRepository(
        [
            AttendanceEvent(id="1", user_id="alice", event_type=EventType.SIGNIN, timestamp=at(9, 45)),
            AttendanceEvent(id="2", user_id="alice", event_type=EventType.BREAK_START, timestamp=at(12)),
            AttendanceEvent(id="3", user_id="alice", event_type=EventType.BREAK_END, timestamp=at(12, 30)),
        ]
    )
    department = Department(
        dept_id="eng",
        dept_name="Engineering",
        shift_start_time=time(9, 0),
        shift_end_time=time(17, 0),
        grace_period_minutes=30,
    )
    container = build_container(
        events=events,
        departments=StaticDepartmentRepository(department),
        overrides=DictOverrideRepository(),
    )
    service = container.metrics_service
    now = at(14)

    print(service.get_user_metrics("alice", now=now).metrics)
    print(service.get_adherence_decision("alice", now=now))

    if service.check_absent_eligibility("alice", now=now):
        service.mark_absent("alice", marked_by="manager", now=now)
    print(service.get_adherence("alice", now=now))


if __name__ == "__main__":
    main()
