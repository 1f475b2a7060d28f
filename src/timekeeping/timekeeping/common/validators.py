from __future__ import annotations

from datetime import datetime, time

from ..core.exceptions import ConfigurationError


def require_non_negative(value: int, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{field_name} must be an integer, got {value!r}")
    if number < 0:
        raise ConfigurationError(f"{field_name} must not be negative")
    return number


def parse_clock_time(value, field_name: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` (or pass a ``time`` through)."""
    if isinstance(value, time):
        return value
    v = (value or "").strip() if isinstance(value, str) else ""
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ConfigurationError(f"{field_name} is not a valid time (HH:MM): {value!r}")
