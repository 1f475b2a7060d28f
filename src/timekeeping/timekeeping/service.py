from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from .adherence.classifier import decide_adherence
from .adherence.eligibility import is_eligible_for_absent
from .adherence.repository import AdherenceOverrideRepository
from .adherence.statistics import AdherenceCounts, count_by_status
from .adherence.strategies.base import AdherenceDecision
from .common.datetime_utils import (
    ensure_utc,
    local_date,
    local_midnight,
    start_of_day,
    start_of_month,
    start_of_week,
    utc_now,
)
from .core.enums import AdherenceStatus
from .core.exceptions import ValidationError
from .events.model import AttendanceEvent
from .events.normalizer import events_on_day, normalize_events
from .events.repository import EventRepository
from .metrics.calculator import calculate_user_metrics
from .metrics.model import UserMetricsResult
from .settings import AppSettings
from .shifts.model import ShiftConfig, resolve_shift_config
from .shifts.repository import DepartmentRepository

logger = logging.getLogger(__name__)


class AttendanceMetricsService:
    """Fetches inputs from external collaborators and runs the pure engine."""

    def __init__(
        self,
        events: EventRepository,
        departments: DepartmentRepository,
        settings: AppSettings,
        overrides: AdherenceOverrideRepository | None = None,
    ):
        self._events = events
        self._departments = departments
        self._settings = settings
        self._overrides = overrides

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def _get_shift(self, user_id: str) -> Optional[ShiftConfig]:
        department = self._departments.get_for_user(user_id)
        return resolve_shift_config(department, self._settings.default_shift)

    def _get_override(self, user_id: str, work_date: date) -> Optional[AdherenceStatus]:
        if not self._overrides:
            return None
        return self._overrides.get(user_id, work_date)

    def _day_events(self, user_id: str, work_date: date) -> list[AttendanceEvent]:
        tz = self._settings.timezone
        since = local_midnight(work_date, tz)
        until = local_midnight(work_date + timedelta(days=1), tz)
        events, _ = normalize_events(self._events.get_for_user(user_id, since=since, until=until))
        return events_on_day(events, work_date, tz)

    def get_user_metrics(self, user_id: str, *, now: datetime | None = None) -> UserMetricsResult:
        """Today's work/break/overtime plus week and month totals for one user."""
        now = ensure_utc(now or utc_now())
        tz = self._settings.timezone

        # Look back one maximum interval so a session opened before the window is still seen.
        window_start = min(start_of_week(now, tz), start_of_month(now, tz))
        since = window_start - timedelta(seconds=self._settings.caps.active_seconds)
        events = self._events.get_for_user(user_id, since=since, until=now)

        return calculate_user_metrics(
            events,
            now,
            user_id=user_id,
            settings=self._settings,
            workday_start=start_of_day(now, tz),
        )

    def get_team_metrics(self, user_ids: Iterable[str], *, now: datetime | None = None) -> dict[str, UserMetricsResult]:
        now = ensure_utc(now or utc_now())
        return {user_id: self.get_user_metrics(user_id, now=now) for user_id in user_ids}

    def get_adherence_decision(
        self,
        user_id: str,
        *,
        now: datetime | None = None,
        work_date: date | None = None,
    ) -> AdherenceDecision:
        now = ensure_utc(now or utc_now())
        work_date = work_date or local_date(now, self._settings.timezone)

        return decide_adherence(
            self._day_events(user_id, work_date),
            self._get_shift(user_id),
            now,
            self._get_override(user_id, work_date),
            timezone=self._settings.timezone,
            work_date=work_date,
            early_margin_minutes=self._settings.early_margin_minutes,
        )

    def get_adherence(self, user_id: str, *, now: datetime | None = None, work_date: date | None = None) -> AdherenceStatus:
        return self.get_adherence_decision(user_id, now=now, work_date=work_date).status

    def check_absent_eligibility(self, user_id: str, *, now: datetime | None = None, work_date: date | None = None) -> bool:
        now = ensure_utc(now or utc_now())
        work_date = work_date or local_date(now, self._settings.timezone)

        status = self.get_adherence(user_id, now=now, work_date=work_date)
        return is_eligible_for_absent(
            status,
            now,
            self._get_shift(user_id),
            timezone=self._settings.timezone,
            work_date=work_date,
            margin_minutes=self._settings.absent_eligibility_margin_minutes,
        )

    def mark_absent(
        self,
        user_id: str,
        *,
        marked_by: str | None = None,
        now: datetime | None = None,
        work_date: date | None = None,
    ) -> None:
        if not self._overrides:
            raise ValidationError("No adherence override store configured")

        now = ensure_utc(now or utc_now())
        work_date = work_date or local_date(now, self._settings.timezone)
        if not self.check_absent_eligibility(user_id, now=now, work_date=work_date):
            raise ValidationError(f"User {user_id} is not eligible to be marked absent on {work_date.isoformat()}")

        self._overrides.save(user_id=user_id, work_date=work_date, status=AdherenceStatus.ABSENT, marked_by=marked_by)
        logger.info("User %s marked absent for %s by %s", user_id, work_date.isoformat(), marked_by)

    def get_adherence_counts(
        self,
        user_ids: Iterable[str],
        *,
        now: datetime | None = None,
        work_date: date | None = None,
    ) -> AdherenceCounts:
        now = ensure_utc(now or utc_now())
        return count_by_status(self.get_adherence(u, now=now, work_date=work_date) for u in user_ids)
