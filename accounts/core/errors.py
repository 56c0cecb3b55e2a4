"""
Service-level error types.

Services and auth dependencies raise these; the application registers a
single exception handler that turns them into ``{"detail": message}`` JSON
responses with the matching status code.
"""

from typing import Dict, Optional


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class UnauthorizedError(ServiceError):
    status_code = 401
    default_message = "Not authorized"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Not authorized as an admin"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "User not found"


class BadRequestError(ServiceError):
    status_code = 400
    default_message = "Bad request"


class DuplicateEmailError(BadRequestError):
    default_message = "User already exists"


class InvalidUserDataError(BadRequestError):
    default_message = "Invalid user data"
