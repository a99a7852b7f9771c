"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

import calendar

DEFAULT_PROFILE_NAME = "Nanny"
DEFAULT_HOURLY_RATE = 25.0
DEFAULT_CURRENCY = "USD"

DEFAULT_WEEK_START = calendar.SUNDAY
WEEKLY_TARGET_HOURS = 40
MONTHLY_TARGET_HOURS = 160

MIN_PASSWORD_LENGTH = 6
DEFAULT_SESSION_TTL_HOURS = 12
TIMER_REFRESH_SECONDS = 60

FALLBACK_SUMMARY = "Great work this week! Keep it up!"
