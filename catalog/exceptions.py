"""
Custom exception classes for the application.

Each exception carries the HTTP status code the HTTP layer answers with,
so handlers never have to map exception types by hand.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog.validation.pipeline import FieldError


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class ValidationError(AppException):
    """
    Data validation failed.

    Carries every field-level error collected by the validation pipeline,
    not just the first one.

    HTTP Status: 400 Bad Request
    """

    http_status = 400

    def __init__(
        self, message: str, errors: "list[FieldError] | None" = None
    ):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(AppException):
    """
    Resource not found.

    Raised when a requested entity id does not resolve.

    HTTP Status: 404 Not Found
    """

    http_status = 404
