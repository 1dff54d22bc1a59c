"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LAST_WORKING_DAY_LOOKBACK_DAYS = 30
DEFAULT_REQUEST_LIST_LIMIT = 200
DEFAULT_MEETING_STATUS = "Scheduled"
MEETING_DATE_FILTERS = ("today", "yesterday", "custom", "past_week", "past_month")
