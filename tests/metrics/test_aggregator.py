from __future__ import annotations

from datetime import datetime

import pytz

from timekeeping.metrics.aggregator import IntervalCaps, aggregate_metrics, clip_periods, periods_since, time_in_window
from timekeeping.periods.model import TimeInterval

UTC = pytz.UTC
EIGHT_HOURS = 8 * 3600


def at(day: int, hour: int, minute: int = 0, month: int = 2) -> datetime:
    return datetime(2026, month, day, hour, minute, tzinfo=UTC)


def test_work_break_and_overtime():
    active = [TimeInterval(at(4, 9), at(4, 12)), TimeInterval(at(4, 12, 30), at(4, 17, 30))]
    breaks = [TimeInterval(at(4, 12), at(4, 12, 30))]

    m = aggregate_metrics(active, breaks, at(4, 18), EIGHT_HOURS, user_id="u1")

    assert m.user_id == "u1"
    assert m.work_time_seconds == 30600
    assert m.break_time_seconds == 1800
    assert m.overtime_seconds == 1800
    assert m.was_capped is False


def test_overtime_never_negative():
    m = aggregate_metrics([TimeInterval(at(4, 9), at(4, 10))], [], at(4, 18), EIGHT_HOURS)

    assert m.overtime_seconds == max(0, m.work_time_seconds - EIGHT_HOURS) == 0


def test_standard_workday_is_configurable():
    m = aggregate_metrics([TimeInterval(at(4, 9), at(4, 17))], [], at(4, 18), 7 * 3600)

    assert m.overtime_seconds == 3600


def test_each_interval_is_capped_before_summing():
    # signin with no signout for three days
    active = [TimeInterval(at(1, 9), at(4, 9))]
    breaks = [TimeInterval(at(4, 10), at(4, 20))]

    m = aggregate_metrics(active, breaks, at(4, 20), EIGHT_HOURS)

    assert m.work_time_seconds == 24 * 3600
    assert m.break_time_seconds == 8 * 3600
    assert m.was_capped is True
    assert m.capped_intervals == 2


def test_custom_caps():
    m = aggregate_metrics(
        [TimeInterval(at(4, 0), at(4, 20))],
        [],
        at(4, 21),
        EIGHT_HOURS,
        caps=IntervalCaps(active_seconds=16 * 3600, break_seconds=3600),
    )

    assert m.work_time_seconds == 16 * 3600


def test_week_and_month_windows():
    # 2026-02-04 is a Wednesday; week started Sunday 2026-02-01
    active = [
        TimeInterval(at(30, 9, month=1), at(30, 17, month=1)),  # Friday of last week, January
        TimeInterval(at(1, 22), at(2, 2)),  # Sunday night into Monday
        TimeInterval(at(4, 9), at(4, 10)),
    ]

    m = aggregate_metrics(active, [], at(4, 10), EIGHT_HOURS)

    assert m.week_time_seconds == 4 * 3600 + 3600
    assert m.month_time_seconds == 4 * 3600 + 3600
    assert m.day_time_seconds == 3600
    assert m.work_time_seconds == 8 * 3600 + 4 * 3600 + 3600


def test_window_clips_interval_crossing_window_start():
    # Saturday 22:00 -> Sunday 03:00 only counts from Sunday 00:00 for the week
    active = [TimeInterval(at(31, 22, month=1), at(1, 3))]

    m = aggregate_metrics(active, [], at(1, 12), EIGHT_HOURS)

    assert m.week_time_seconds == 3 * 3600
    assert m.month_time_seconds == 3 * 3600
    assert m.work_time_seconds == 5 * 3600


def test_windows_follow_local_timezone():
    # Sunday 04:00 UTC is still Saturday 23:00 in New York, so the new week and month have not started there
    active = [TimeInterval(at(31, 23, month=1), at(1, 3))]
    now = at(1, 4)

    utc = aggregate_metrics(active, [], now, EIGHT_HOURS, timezone="UTC")
    new_york = aggregate_metrics(active, [], now, EIGHT_HOURS, timezone="America/New_York")

    assert utc.week_time_seconds == 3 * 3600
    assert utc.month_time_seconds == 3 * 3600
    assert utc.day_time_seconds == 3 * 3600
    assert new_york.week_time_seconds == 4 * 3600
    assert new_york.month_time_seconds == 4 * 3600
    assert new_york.day_time_seconds == 4 * 3600
    assert utc.work_time_seconds == new_york.work_time_seconds == 4 * 3600


def test_workday_start_keeps_session_open_at_midnight_whole():
    active = [
        TimeInterval(at(3, 9), at(3, 17)),
        TimeInterval(at(3, 22), at(4, 2)),
        TimeInterval(at(4, 9), at(4, 10)),
    ]
    breaks = [TimeInterval(at(3, 20), at(3, 22))]

    m = aggregate_metrics(active, breaks, at(4, 12), EIGHT_HOURS, workday_start=at(4, 0))

    assert m.work_time_seconds == 4 * 3600 + 3600
    assert m.break_time_seconds == 0
    assert m.day_time_seconds == 3 * 3600
    assert m.week_time_seconds == 8 * 3600 + 5 * 3600


def test_periods_since_drops_only_finished_sessions():
    periods = [TimeInterval(at(3, 9), at(3, 17)), TimeInterval(at(3, 22), at(4, 2))]

    assert periods_since(periods, at(4, 0)) == [TimeInterval(at(3, 22), at(4, 2))]


def test_clip_and_window_helpers():
    periods = [TimeInterval(at(4, 8), at(4, 12)), TimeInterval(at(4, 13), at(4, 14))]

    assert clip_periods(periods, at(4, 10), at(4, 13)) == [TimeInterval(at(4, 10), at(4, 12))]
    assert time_in_window(periods, at(4, 0), at(4, 13, 30), 24 * 3600) == 4 * 3600 + 1800


def test_metrics_are_idempotent():
    active = [TimeInterval(at(4, 9), at(4, 12))]
    now = at(4, 12)

    assert aggregate_metrics(active, [], now, EIGHT_HOURS) == aggregate_metrics(active, [], now, EIGHT_HOURS)


def test_state_flags_pass_through():
    m = aggregate_metrics([], [], at(4, 12), EIGHT_HOURS, is_active=True, is_on_break=False)

    assert m.is_active is True
    assert m.work_time_seconds == 0
    assert m.last_activity is None
