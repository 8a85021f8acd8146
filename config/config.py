import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "")
    AUTH_PASSWORD_HASH = os.environ.get("AUTH_PASSWORD_HASH", "")

    # Time-tracking service
    TIME_TRACKING_API_KEY = os.environ.get("TIME_TRACKING_API_KEY", os.environ.get("CLOCKIFY_API_KEY", ""))
    TIME_TRACKING_BASE_URL = os.environ.get("TIME_TRACKING_BASE_URL", "https://api.clockify.me/api/v1")
    FANOUT_MAX_WORKERS = int(os.environ.get("FANOUT_MAX_WORKERS", "5"))
    UPSTREAM_TIMEOUT = float(os.environ.get("UPSTREAM_TIMEOUT", "15"))

    # One external group per class hour
    GROUP_IDS = {
        "1": os.environ.get("GROUP_ID_HOUR_1", ""),
        "2": os.environ.get("GROUP_ID_HOUR_2", ""),
        "3": os.environ.get("GROUP_ID_HOUR_3", ""),
        "4": os.environ.get("GROUP_ID_HOUR_4", ""),
    }

    # Roster document
    DATA_DIR = os.environ.get("DATA_DIR", "data")
    STUDENTS_DOCUMENT = os.environ.get("STUDENTS_DOCUMENT", "students.json")

    SESSION_HOURS = int(os.environ.get("SESSION_HOURS", "24"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


SECRET_KEY = Config.SECRET_KEY
AUTH_PASSWORD_HASH = Config.AUTH_PASSWORD_HASH
TIME_TRACKING_API_KEY = Config.TIME_TRACKING_API_KEY
TIME_TRACKING_BASE_URL = Config.TIME_TRACKING_BASE_URL
FANOUT_MAX_WORKERS = Config.FANOUT_MAX_WORKERS
UPSTREAM_TIMEOUT = Config.UPSTREAM_TIMEOUT
GROUP_IDS = Config.GROUP_IDS
DATA_DIR = Config.DATA_DIR
STUDENTS_DOCUMENT = Config.STUDENTS_DOCUMENT
SESSION_HOURS = Config.SESSION_HOURS
LOG_LEVEL = Config.LOG_LEVEL

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
