import os

TIMEZONE = os.getenv("TIMEZONE", "UTC")

STANDARD_WORKDAY_HOURS = float(os.getenv("STANDARD_WORKDAY_HOURS", "8"))

DEFAULT_SHIFT_START = os.getenv("DEFAULT_SHIFT_START", "09:00")
DEFAULT_SHIFT_END = os.getenv("DEFAULT_SHIFT_END", "17:00")
DEFAULT_GRACE_PERIOD_MINUTES = int(os.getenv("DEFAULT_GRACE_PERIOD_MINUTES", "30"))

MAX_ACTIVE_INTERVAL_HOURS = float(os.getenv("MAX_ACTIVE_INTERVAL_HOURS", "24"))
MAX_BREAK_INTERVAL_HOURS = float(os.getenv("MAX_BREAK_INTERVAL_HOURS", "8"))

# Managers may only mark a late user absent this long after the grace period ends
ABSENT_ELIGIBILITY_MARGIN_MINUTES = int(os.getenv("ABSENT_ELIGIBILITY_MARGIN_MINUTES", "0"))
EARLY_MARGIN_MINUTES = int(os.getenv("EARLY_MARGIN_MINUTES", "0"))

DEBUG = False
