from __future__ import annotations

from typing import Any, List, Optional


class AppError(Exception):
    """
    Base class for errors that map to a fixed HTTP status and message.

    Repositories and services raise subclasses; the exception handlers in
    employee_api.api.main turn them into the standard error envelope.
    """

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        errors: Optional[List[Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)


class NotFoundError(AppError):
    """Entity absent."""

    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Uniqueness violation on create/update."""

    status_code = 400
    default_message = "Conflict"

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class ValidationError(AppError):
    """Malformed input; carries field-level errors."""

    status_code = 400
    default_message = "Validation Error"


class InvalidCredentialsError(AppError):
    status_code = 401
    default_message = "Invalid credentials"


class NoTokenError(AppError):
    status_code = 401
    default_message = "No token provided"


class InvalidTokenError(AppError):
    status_code = 401
    default_message = "Invalid token"


class TokenExpiredError(InvalidTokenError):
    """Signature valid but the token is past its expiry."""

    default_message = "Token expired"


class InsufficientRoleError(AppError):
    status_code = 403
    default_message = "Insufficient permissions"


class StoreError(AppError):
    """Backing document could not be read or written."""

    status_code = 500
    default_message = "Storage failure"
