# app/core/exceptions.py
from fastapi import status


class AppError(Exception):
    """
    Base class for domain errors raised by services.

    Services raise these instead of HTTPException so they stay usable
    outside a request; `app.main` maps them to JSON responses.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "An error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message}


class AuthenticationError(AppError):
    """No authenticated caller."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated."


class AuthorizationError(AppError):
    """Caller is authenticated but lacks the required role or ownership."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized Access."


class ValidationError(AppError):
    """Required data is missing or inconsistent."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data."


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """A unique field is already held by another record."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "A record with the same details already exists"


class GenerationError(AppError):
    """Unique slug generation gave up after too many collisions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Could not generate a unique slug"
