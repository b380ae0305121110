"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_HOURS = 72

REMOTE_WORK_SIX_MONTH_LIMIT = 4
REMOTE_WORK_ONE_MONTH_LIMIT = 2

SYNC_WORKDAY_START_HOUR = 9
SYNC_WORKDAY_END_HOUR = 18

GATEWAY_MIN_TIMEOUT_SECONDS = 5
GATEWAY_MAX_TIMEOUT_SECONDS = 10

UPSTREAM_DATE_FORMAT = "%d/%m/%Y"

APPROVAL_REDIRECT_PATH = "/leaves"
