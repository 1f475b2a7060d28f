"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600

DEFAULT_TIMEZONE = "UTC"
DEFAULT_STANDARD_WORKDAY_HOURS = 8

# Department fallback when a user has no department.
DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "17:00"
DEFAULT_GRACE_PERIOD_MINUTES = 30

# Interval ceilings applied before aggregation.
MAX_ACTIVE_INTERVAL_SECONDS = 24 * SECONDS_PER_HOUR
MAX_BREAK_INTERVAL_SECONDS = 8 * SECONDS_PER_HOUR

# Extra minutes past shift start + grace before a late user may be marked absent.
ABSENT_ELIGIBILITY_MARGIN_MINUTES = 0

# Minutes before shift start a sign-in must happen to count as early.
EARLY_MARGIN_MINUTES = 0
