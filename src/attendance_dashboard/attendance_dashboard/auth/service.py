from __future__ import annotations

import logging
import secrets

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash for ``AUTH_PASSWORD_HASH``."""
    require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
    return generate_password_hash(password)


class AuthService:
    """Use case: single shared-password login.

    There are no user accounts; a successful login only earns an opaque
    session token.
    """

    def __init__(self, *, password_hash: str, secret_key: str):
        self._password_hash = password_hash
        self._secret_key = secret_key

    def verify_password(self, password: str) -> bool:
        if not self._password_hash:
            raise ConfigurationError("AUTH_PASSWORD_HASH not configured")

        try:
            return check_password_hash(self._password_hash, password)
        except ValueError:
            logger.error("AUTH_PASSWORD_HASH is not a valid password hash")
            raise ConfigurationError("AUTH_PASSWORD_HASH is not a valid password hash")

    def issue_session(self) -> str:
        if not self._secret_key:
            raise ConfigurationError("SECRET_KEY not configured")
        return secrets.token_urlsafe(32)

    def login(self, password: str) -> str:
        password = require_non_empty(password, "Password")
        if not self.verify_password(password):
            logger.warning("Rejected login attempt")
            raise AuthenticationError("Invalid password")

        logger.info("Login succeeded, issuing session")
        return self.issue_session()
