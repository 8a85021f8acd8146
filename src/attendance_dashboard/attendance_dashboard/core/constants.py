"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

VALID_HOURS = ("1", "2", "3", "4")
DEFAULT_HOUR = "1"

STUDENTS_DOCUMENT = "students.json"

SESSION_COOKIE_NAME = "attendance_session"
DEFAULT_SESSION_HOURS = 24
MIN_PASSWORD_LENGTH = 6

DEFAULT_TIME_TRACKING_BASE_URL = "https://api.clockify.me/api/v1"
DEFAULT_FANOUT_MAX_WORKERS = 5
DEFAULT_UPSTREAM_TIMEOUT = 15
DEFAULT_PAGE_SIZE = 200

# Live refresh cadence (seconds)
HEARTBEAT_SECONDS = 30
IDLE_POLL_SECONDS = 60
RAMP_UP_SECONDS = 30
CLOSING_SECONDS = 15
STEADY_SECONDS = 10 * 60
MANUAL_SECONDS = STEADY_SECONDS

# Width of the ramp-up and closing zones (minutes)
ZONE_MINUTES = 10
