"""Domain errors raised by the services and rendered by the API layer."""


class SanctumError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SanctumError):
    """Missing or malformed input."""

    status_code = 400


class ConflictError(SanctumError):
    """The resource already exists (duplicate identity on registration)."""

    status_code = 400


class AuthenticationError(SanctumError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class NotFoundError(SanctumError):
    """The resource does not exist or is owned by someone else."""

    status_code = 404


class PayloadTooLargeError(SanctumError):
    """Uploaded body exceeds the allowed size."""

    status_code = 413


class UpstreamError(SanctumError):
    """The database or blob store failed."""

    status_code = 500
