"""
Application error hierarchy.

Raised by the query builders and the CRUD layer; translated to HTTP
responses by the exception handler registered in main.py.
"""

from fastapi import status


class AppError(Exception):
    """Base error carrying a client-facing message and HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Request data cannot be used to build or run a query."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message)


class NotFoundError(AppError):
    """Query targeted a row that does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class UnauthorizedError(AppError):
    """Credentials are missing or invalid."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)
