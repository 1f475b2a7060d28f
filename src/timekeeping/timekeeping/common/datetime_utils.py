"""Timezone normalisation helpers.

Every day/week/month boundary in the engine is a wall-clock boundary in the
configured timezone. Instants are carried as timezone-aware UTC datetimes;
naive datetimes are interpreted as UTC.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

import pytz

from ..core.exceptions import InvalidTimezoneError

TimezoneLike = Union[str, pytz.BaseTzInfo]

# Postgres timestamptz text: any fraction length, offsets like +07, +0700, +07:00
_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(?::\d{2})?)"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?:(?P<sign>[+-])(?P<hours>\d{2})(?::?(?P<minutes>\d{2}))?)?$"
)


@dataclass(frozen=True)
class WallClock:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    @property
    def date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def time(self) -> time:
        return time(self.hour, self.minute, self.second)


def get_timezone(tz: TimezoneLike) -> pytz.BaseTzInfo:
    """Resolve an IANA zone name; unknown names fail fast."""
    if isinstance(tz, pytz.BaseTzInfo):
        return tz
    try:
        return pytz.timezone(tz)
    except (pytz.UnknownTimeZoneError, AttributeError) as e:
        raise InvalidTimezoneError(str(tz)) from e


def is_valid_timezone(name: str) -> bool:
    try:
        get_timezone(name)
    except InvalidTimezoneError:
        return False
    return True


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive input is taken as UTC)."""
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def parse_timestamp(value) -> datetime:
    """Parse an event timestamp into an aware UTC datetime.

    Accepts datetimes and ISO-8601 strings (a trailing ``Z`` means UTC),
    including the Postgres ``timestamptz`` text form (``+00`` offsets, 1-9
    fraction digits).
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")

    text = value.strip()
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(_to_isoformat(text)))


def _to_isoformat(text: str) -> str:
    match = _TIMESTAMP_RE.match(text)
    if not match:
        return text

    result = match.group("base")
    fraction = match.group("fraction")
    if fraction:
        result += "." + fraction[:6].ljust(6, "0")
    sign = match.group("sign")
    if sign:
        result += f"{sign}{match.group('hours')}:{match.group('minutes') or '00'}"
    return result


def to_local(instant: datetime, tz: TimezoneLike) -> datetime:
    return ensure_utc(instant).astimezone(get_timezone(tz))


def to_wall_clock(instant: datetime, tz: TimezoneLike) -> WallClock:
    local = to_local(instant, tz)
    return WallClock(
        year=local.year,
        month=local.month,
        day=local.day,
        hour=local.hour,
        minute=local.minute,
        second=local.second,
    )


def local_date(instant: datetime, tz: TimezoneLike) -> date:
    return to_wall_clock(instant, tz).date


def combine_local(day: date, at: time, tz: TimezoneLike) -> datetime:
    """UTC instant of wall-clock ``day`` ``at`` in ``tz``."""
    zone = get_timezone(tz)
    local = zone.localize(datetime.combine(day, at.replace(tzinfo=None)))
    return local.astimezone(pytz.UTC)


def local_midnight(day: date, tz: TimezoneLike) -> datetime:
    return combine_local(day, time(0, 0), tz)


def start_of_day(now: datetime, tz: TimezoneLike) -> datetime:
    return local_midnight(local_date(now, tz), tz)


def start_of_week(now: datetime, tz: TimezoneLike) -> datetime:
    """Most recent wall-clock Sunday 00:00 (today if today is Sunday)."""
    today = local_date(now, tz)
    days_since_sunday = (today.weekday() + 1) % 7
    return local_midnight(today - timedelta(days=days_since_sunday), tz)


def start_of_month(now: datetime, tz: TimezoneLike) -> datetime:
    return local_midnight(local_date(now, tz).replace(day=1), tz)


def same_local_day(a: datetime, b: datetime, tz: TimezoneLike) -> bool:
    return local_date(a, tz) == local_date(b, tz)


def utc_now() -> datetime:
    """Current instant (aware UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.UTC)
