"""Custom exception types for domain and API layers."""


class AppError(Exception):
    """Base app exception."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """Requested record does not exist."""

    status_code = 404
    code = "not_found"


class ForbiddenError(AppError):
    """Caller lacks the privilege required for the operation."""

    status_code = 403
    code = "forbidden"


class ValidationError(AppError):
    """Validation failure for user input."""

    status_code = 422
    code = "validation_error"


class StorePersistenceError(AppError):
    """Record store read or write failure."""

    status_code = 503
    code = "store_unavailable"
