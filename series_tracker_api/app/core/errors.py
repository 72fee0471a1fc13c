"""
Error kinds raised by the service layer.

Every service either returns its result or raises one of the
exceptions below.  ``create_app`` registers a single handler for
``ServiceError`` which renders ``{"error": message}`` with the
kind's HTTP status, so endpoints never translate errors themselves.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed or missing client input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid input"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "conflict"


class UnauthorizedError(ServiceError):
    """Bad credentials.  The message never says which part was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "invalid credentials"


class InternalError(ServiceError):
    """Hashing or storage failure.  Only a generic message reaches the client."""
