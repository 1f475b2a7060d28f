TIMEZONE = "UTC"

STANDARD_WORKDAY_HOURS = 8

DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "17:00"
DEFAULT_GRACE_PERIOD_MINUTES = 30

MAX_ACTIVE_INTERVAL_HOURS = 24
MAX_BREAK_INTERVAL_HOURS = 8

ABSENT_ELIGIBILITY_MARGIN_MINUTES = 0
EARLY_MARGIN_MINUTES = 0

DEBUG = False
TESTING = True
