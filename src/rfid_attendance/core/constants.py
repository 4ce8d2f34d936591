"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIME_ZONE = "Asia/Manila"
DEFAULT_DAILY_TAP_LIMIT = 8
DEFAULT_RECENT_LOGS_LIMIT = 10

MIN_UID_LENGTH = 6
MAX_UID_LENGTH = 20

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100

DEFAULT_PHONE_PATTERN = r"^\+63\d{10}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

NEW_LOG_TOPIC = "new-log"
