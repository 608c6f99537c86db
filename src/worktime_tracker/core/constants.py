"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WEEKLY_TARGET_HOURS = 40
WORKDAYS_PER_WEEK = 5

# 0 = Monday (ISO week)
DEFAULT_WEEK_START = 0

STREAK_LOOKBACK_DAYS = 60
PRODUCTIVITY_WINDOW_DAYS = 14

# Score weights must add up to 100.
PRODUCTIVITY_COMPLETION_WEIGHT = 70
PRODUCTIVITY_CONSISTENCY_WEIGHT = 30

DEFAULT_EXPORT_DAYS = 7
