"""
Domain errors raised by services and dependencies.

Each error carries the HTTP status it maps to; `main.create_app` installs a
single handler that renders them as `{"detail": message}`.
"""

from fastapi import status


class ReportingError(Exception):
    """Base class for errors that surface to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class InvalidCredentialsError(ReportingError):
    # Same message for unknown user and wrong password.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class UnauthenticatedError(ReportingError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class ForbiddenError(ReportingError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(ReportingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ReportingError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class BadRequestError(ReportingError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class SummaryGenerationError(ReportingError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Summary generation failed"
