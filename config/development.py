from config.config import *  # noqa: F401,F403

SECRET_KEY = SECRET_KEY or "dev-secret-key"  # noqa: F405

DEBUG = True
LOG_LEVEL = "DEBUG"
SECURE_COOKIES = False
