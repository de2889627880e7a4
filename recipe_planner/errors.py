"""Exception taxonomy surfaced to clients as ``{"message": ...}`` bodies."""


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Raised when request input is missing or malformed."""

    status_code = 400


class AuthError(ApiError):
    """Raised when the bearer token is missing, malformed, or invalid."""

    status_code = 401


class ForbiddenError(ApiError):
    """Raised when the caller's role does not allow the operation."""

    status_code = 403


class NotFoundError(ApiError):
    """Raised when a referenced user or resource does not exist."""

    status_code = 404


class ConflictError(ApiError):
    """Raised on a duplicate unique value or duplicate item id."""

    status_code = 409


class InternalError(ApiError):
    """Raised for failures whose details must not reach the client."""

    status_code = 500


class ServiceUnavailableError(ApiError):
    """Raised when an optional integration is not configured."""

    status_code = 503
