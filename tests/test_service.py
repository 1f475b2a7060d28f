from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

import pytest
import pytz

from timekeeping.container import build_container
from timekeeping.core.enums import AdherenceStatus, EventType
from timekeeping.core.exceptions import ValidationError
from timekeeping.events.model import AttendanceEvent
from timekeeping.service import AttendanceMetricsService
from timekeeping.settings import AppSettings
from timekeeping.shifts.model import Department

UTC = pytz.UTC
TODAY = date(2026, 2, 4)


def at(day: int, hour: int, minute: int = 0, month: int = 2) -> datetime:
    return datetime(2026, month, day, hour, minute, tzinfo=UTC)


@dataclass
class InMemoryEventRepository:
    events: list[AttendanceEvent] = field(default_factory=list)

    def add(self, user_id: str, event_type: EventType, timestamp: datetime) -> None:
        self.events.append(
            AttendanceEvent(id=str(len(self.events) + 1), user_id=user_id, event_type=event_type, timestamp=timestamp)
        )

    def get_for_user(self, user_id: str, *, since=None, until=None):
        return [
            e
            for e in self.events
            if e.user_id == user_id
            and (since is None or e.timestamp >= since)
            and (until is None or e.timestamp <= until)
        ]


@dataclass
class InMemoryDepartmentRepository:
    by_user: dict[str, Department] = field(default_factory=dict)

    def get_for_user(self, user_id: str) -> Optional[Department]:
        return self.by_user.get(user_id)


@dataclass
class InMemoryOverrideRepository:
    saved: dict = field(default_factory=dict)

    def get(self, user_id: str, work_date: date) -> Optional[AdherenceStatus]:
        entry = self.saved.get((user_id, work_date))
        return entry["status"] if entry else None

    def save(self, *, user_id: str, work_date: date, status: AdherenceStatus, marked_by: Optional[str] = None) -> None:
        self.saved[(user_id, work_date)] = {"status": status, "marked_by": marked_by}


@pytest.fixture
def events():
    return InMemoryEventRepository()


@pytest.fixture
def overrides():
    return InMemoryOverrideRepository()


@pytest.fixture
def service(events, overrides):
    departments = InMemoryDepartmentRepository(
        {
            "support": Department(dept_id="d2", dept_name="Support"),
            "ops": Department(
                dept_id="d1",
                dept_name="Ops",
                shift_start_time=time(7, 0),
                shift_end_time=time(15, 0),
                grace_period_minutes=10,
            ),
        }
    )
    return AttendanceMetricsService(events, departments, AppSettings(), overrides)


def test_user_metrics_for_today_and_week(service, events, fixed_now):
    events.add("u1", EventType.SIGNIN, at(3, 9))
    events.add("u1", EventType.SIGNOUT, at(3, 17))
    events.add("u1", EventType.SIGNIN, at(4, 9))

    result = service.get_user_metrics("u1", now=fixed_now)

    m = result.metrics
    assert m.user_id == "u1"
    assert m.is_active is True
    assert m.work_time_seconds == 3600
    assert m.overtime_seconds == 0
    assert m.week_time_seconds == 9 * 3600
    assert m.last_activity.type == EventType.SIGNIN


def test_overnight_session_is_not_cut_at_midnight(service, events):
    events.add("u1", EventType.SIGNIN, at(3, 22))

    m = service.get_user_metrics("u1", now=at(4, 3)).metrics

    assert m.is_active is True
    assert m.work_time_seconds == 5 * 3600
    assert m.day_time_seconds == 3 * 3600
    assert m.week_time_seconds == 5 * 3600


def test_session_opened_before_the_week_is_still_counted(service, events):
    events.add("u1", EventType.SIGNIN, at(31, 22, month=1))
    events.add("u1", EventType.SIGNOUT, at(1, 2))

    m = service.get_user_metrics("u1", now=at(1, 3)).metrics

    assert m.week_time_seconds == 2 * 3600
    assert m.month_time_seconds == 2 * 3600


def test_team_metrics(service, events, fixed_now):
    events.add("u1", EventType.SIGNIN, at(4, 9))

    team = service.get_team_metrics(["u1", "u2"], now=fixed_now)

    assert team["u1"].metrics.work_time_seconds == 3600
    assert team["u2"].metrics.work_time_seconds == 0


def test_late_user_can_be_marked_absent(service, events, overrides, fixed_now):
    events.add("u1", EventType.SIGNIN, at(4, 9, 45))

    assert service.get_adherence("u1", now=fixed_now) == AdherenceStatus.LATE
    assert service.check_absent_eligibility("u1", now=fixed_now) is True

    service.mark_absent("u1", marked_by="manager", now=fixed_now)

    assert overrides.saved[("u1", TODAY)] == {"status": AdherenceStatus.ABSENT, "marked_by": "manager"}
    decision = service.get_adherence_decision("u1", now=fixed_now)
    assert decision.status == AdherenceStatus.ABSENT
    assert decision.note == "Persisted status"


def test_on_time_user_cannot_be_marked_absent(service, events, overrides, fixed_now):
    events.add("u1", EventType.SIGNIN, at(4, 9, 10))

    with pytest.raises(ValidationError):
        service.mark_absent("u1", now=fixed_now)

    assert overrides.saved == {}


def test_mark_absent_needs_an_override_store(events, fixed_now):
    events.add("u1", EventType.SIGNIN, at(4, 9, 45))
    service = AttendanceMetricsService(events, InMemoryDepartmentRepository(), AppSettings())

    with pytest.raises(ValidationError):
        service.mark_absent("u1", now=fixed_now)


def test_yesterday_signin_does_not_count_today(service, events, fixed_now):
    events.add("u1", EventType.SIGNIN, at(3, 8))

    assert service.get_adherence("u1", now=fixed_now) == AdherenceStatus.ABSENT


def test_department_shift_is_used(service, events, fixed_now):
    events.add("ops", EventType.SIGNIN, at(4, 7, 5))
    events.add("support", EventType.SIGNIN, at(4, 9))

    assert service.get_adherence("ops", now=fixed_now) == AdherenceStatus.ON_TIME
    assert service.get_adherence("support", now=fixed_now) == AdherenceStatus.NOT_SET
    assert service.check_absent_eligibility("support", now=fixed_now) is False


def test_adherence_for_an_earlier_day(service, events, fixed_now):
    events.add("u1", EventType.SIGNIN, at(2, 8, 30))

    assert service.get_adherence("u1", now=fixed_now, work_date=date(2026, 2, 2)) == AdherenceStatus.EARLY


def test_adherence_counts(service, events, fixed_now):
    events.add("u1", EventType.SIGNIN, at(4, 9, 45))
    events.add("u2", EventType.SIGNIN, at(4, 8, 55))

    counts = service.get_adherence_counts(["u1", "u2", "u3", "support"], now=fixed_now)

    assert counts.get(AdherenceStatus.LATE) == 1
    assert counts.get(AdherenceStatus.EARLY) == 1
    assert counts.get(AdherenceStatus.ABSENT) == 1
    assert counts.get(AdherenceStatus.NOT_SET) == 1
    assert counts.attendance_rate == 66.7


def test_service_uses_configured_timezone(events):
    # 09:10 in Tokyo
    events.add("u1", EventType.SIGNIN, at(4, 0, 10))
    service = AttendanceMetricsService(events, InMemoryDepartmentRepository(), AppSettings(timezone="Asia/Tokyo"))

    assert service.get_adherence("u1", now=at(4, 2)) == AdherenceStatus.ON_TIME


def test_build_container_wires_service(monkeypatch, events, overrides, fixed_now):
    monkeypatch.setenv("APP_ENV", "testing")
    departments = InMemoryDepartmentRepository()

    container = build_container(events=events, departments=departments, overrides=overrides)

    assert container.settings == AppSettings()
    assert container.events_repo is events
    assert container.metrics_service.settings is container.settings

    events.add("u1", EventType.SIGNIN, at(4, 9))
    assert container.metrics_service.get_adherence("u1", now=fixed_now) == AdherenceStatus.EARLY
