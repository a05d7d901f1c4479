"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 30
RECENT_EMPLOYEES_LIMIT = 5
PENDING_LEAVES_LIMIT = 50
ACTIVE_TASKS_LIMIT = 50
MIN_PASSWORD_LENGTH = 6
MAX_HOURS_PER_DAY = 24
