class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when the shared password is wrong or the session is missing."""

    status_code = 401


class NotFoundError(DomainError):
    """Raised when a referenced student is not on the roster."""

    status_code = 404


class VersionConflictError(DomainError):
    """Raised when the roster document changed since it was read."""

    status_code = 409


class ConfigurationError(DomainError):
    """Raised when a required credential or setting is missing."""

    status_code = 500


class StorageError(DomainError):
    """Raised when the roster document cannot be written."""

    status_code = 500


class UpstreamError(DomainError):
    """Raised when the time-tracking service fails or is unreachable."""

    status_code = 502
