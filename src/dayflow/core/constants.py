"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_HOURS = 24
PASSWORD_MIN_LENGTH = 8
GENERATED_PASSWORD_LENGTH = 12
LOGIN_ID_SERIAL_WIDTH = 4
ATTENDANCE_WEEK_DAYS = 7

GENERIC_ERROR_MESSAGE = "An error occurred processing your request"

DB_POOL_TIMEOUT_SECONDS = 5.0
DB_POOL_RETRY_INTERVAL_SECONDS = 0.05
LOGIN_ID_ALLOCATION_ATTEMPTS = 3
