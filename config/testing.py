from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
# Tests install their own hash through create_app(overrides=...)
AUTH_PASSWORD_HASH = ""
TIME_TRACKING_API_KEY = "test-api-key"
GROUP_IDS = {"1": "group-1", "2": "group-2", "3": "group-3", "4": "group-4"}

DEBUG = False
TESTING = True
SECURE_COOKIES = False
LOG_LEVEL = "WARNING"
