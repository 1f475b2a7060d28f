from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .common.datetime_utils import get_timezone
from .common.validators import require_non_negative
from .config import get_settings_module
from .core.constants import (
    ABSENT_ELIGIBILITY_MARGIN_MINUTES,
    DEFAULT_STANDARD_WORKDAY_HOURS,
    DEFAULT_TIMEZONE,
    EARLY_MARGIN_MINUTES,
    MAX_ACTIVE_INTERVAL_SECONDS,
    MAX_BREAK_INTERVAL_SECONDS,
    SECONDS_PER_HOUR,
)
from .core.exceptions import ConfigurationError
from .metrics.aggregator import IntervalCaps
from .shifts.model import ShiftConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSettings:
    """Application-wide settings passed explicitly into every computation."""

    timezone: str = DEFAULT_TIMEZONE
    standard_workday_seconds: int = DEFAULT_STANDARD_WORKDAY_HOURS * SECONDS_PER_HOUR
    default_shift: ShiftConfig = field(default_factory=ShiftConfig.default)
    caps: IntervalCaps = field(default_factory=IntervalCaps)
    absent_eligibility_margin_minutes: int = ABSENT_ELIGIBILITY_MARGIN_MINUTES
    early_margin_minutes: int = EARLY_MARGIN_MINUTES

    def __post_init__(self):
        get_timezone(self.timezone)
        require_non_negative(self.standard_workday_seconds, "standard_workday_seconds")
        require_non_negative(self.absent_eligibility_margin_minutes, "absent_eligibility_margin_minutes")
        require_non_negative(self.early_margin_minutes, "early_margin_minutes")


def _hours_to_seconds(value, name: str) -> int:
    try:
        return int(float(value) * SECONDS_PER_HOUR)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number of hours, got {value!r}")


def load_settings(module_name: Optional[str] = None) -> AppSettings:
    """Build AppSettings from an environment settings module.

    ``.env`` is loaded first (without overriding real environment variables),
    then ``module_name`` or the module selected by ``APP_ENV`` is imported.
    """
    load_dotenv(override=False)
    module_name = module_name or get_settings_module()
    settings = importlib.import_module(module_name)

    default_shift = ShiftConfig(
        start_time=getattr(settings, "DEFAULT_SHIFT_START", "09:00"),
        end_time=getattr(settings, "DEFAULT_SHIFT_END", "17:00"),
        grace_period_minutes=getattr(settings, "DEFAULT_GRACE_PERIOD_MINUTES", 30),
    )
    caps = IntervalCaps(
        active_seconds=_hours_to_seconds(
            getattr(settings, "MAX_ACTIVE_INTERVAL_HOURS", MAX_ACTIVE_INTERVAL_SECONDS / SECONDS_PER_HOUR),
            "MAX_ACTIVE_INTERVAL_HOURS",
        ),
        break_seconds=_hours_to_seconds(
            getattr(settings, "MAX_BREAK_INTERVAL_HOURS", MAX_BREAK_INTERVAL_SECONDS / SECONDS_PER_HOUR),
            "MAX_BREAK_INTERVAL_HOURS",
        ),
    )

    app_settings = AppSettings(
        timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
        standard_workday_seconds=_hours_to_seconds(
            getattr(settings, "STANDARD_WORKDAY_HOURS", DEFAULT_STANDARD_WORKDAY_HOURS),
            "STANDARD_WORKDAY_HOURS",
        ),
        default_shift=default_shift,
        caps=caps,
        absent_eligibility_margin_minutes=int(
            getattr(settings, "ABSENT_ELIGIBILITY_MARGIN_MINUTES", ABSENT_ELIGIBILITY_MARGIN_MINUTES)
        ),
        early_margin_minutes=int(getattr(settings, "EARLY_MARGIN_MINUTES", EARLY_MARGIN_MINUTES)),
    )

    if getattr(settings, "DEBUG", False):
        logger.debug("Loaded settings from %s: timezone=%s", module_name, app_settings.timezone)
    return app_settings
