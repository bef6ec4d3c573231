from abc import ABC

from pydantic import BaseModel


class FieldError(BaseModel):
    """Single field-level validation problem."""

    field: str
    message: str


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """

    status_code: int = 400
    error_type: str = "bad_request"


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails or the caller may not touch a resource."""

    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class ConflictError(UserError):
    """Raised when a resource with the same unique key already exists."""

    status_code = 409
    error_type = "conflict"


class ValidationError(UserError):
    """Raised when user input fails validation.

    Carries every field problem found, not just the first one.
    """

    status_code = 422
    error_type = "validation_error"

    def __init__(self, message: str = "Invalid input", errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
