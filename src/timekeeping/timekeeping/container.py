from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .adherence.repository import AdherenceOverrideRepository
from .events.repository import EventRepository
from .service import AttendanceMetricsService
from .settings import AppSettings, load_settings
from .shifts.repository import DepartmentRepository


@dataclass(frozen=True)
class Container:
    settings: AppSettings

    events_repo: EventRepository
    departments_repo: DepartmentRepository
    overrides_repo: Optional[AdherenceOverrideRepository]

    metrics_service: AttendanceMetricsService


def build_container(
    *,
    events: EventRepository,
    departments: DepartmentRepository,
    overrides: Optional[AdherenceOverrideRepository] = None,
    settings: Optional[AppSettings] = None,
) -> Container:
    """Wire the engine to the caller's event, department and override stores."""
    settings = settings or load_settings()

    metrics_service = AttendanceMetricsService(events, departments, settings, overrides)

    return Container(
        settings=settings,
        events_repo=events,
        departments_repo=departments,
        overrides_repo=overrides,
        metrics_service=metrics_service,
    )
