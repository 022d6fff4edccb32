"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_SESSION_REFRESH_HOURS = 24
VERIFICATION_TOKEN_HOURS = 24

DEFAULT_PAGE_LIMIT = 10
DEFAULT_PAGE_OFFSET = 0

EMPLOYEE_ID_MAX_LENGTH = 7

RECENT_DETAIL_ROWS = 10
RECENT_DASHBOARD_ROWS = 5
RECENT_ACTIVITY_PER_SOURCE = 3
RECENT_ACTIVITY_LIMIT = 5

MS_PER_DAY = 86_400_000

DEFAULT_REDIRECT_URL = "/"
