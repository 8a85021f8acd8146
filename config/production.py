from config.config import *  # noqa: F401,F403

# SECRET_KEY and AUTH_PASSWORD_HASH must come from the environment here;
# the session gate refuses to issue cookies without them.
DEBUG = False
SECURE_COOKIES = True
