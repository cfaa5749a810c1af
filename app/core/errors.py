# app/core/errors.py
from typing import Optional

from fastapi import status


class MarketplaceError(ValueError):
    """Base class for user-visible marketplace errors.

    Each subclass maps to one HTTP status; the message is shown to the
    client as-is, so it must never contain secrets.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class AuthError(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class UnauthorizedError(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please log in to continue"


class ForbiddenError(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidTransitionError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Invalid status transition"
