"""Typed exceptions raised by the service layer and rendered at the HTTP boundary."""
from __future__ import annotations

from fastapi import status


class MessagelyError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MessagelyError):
    """Missing, empty, or malformed request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidCredentials(MessagelyError):
    """
    Login rejected.

    Raised for unknown users and wrong passwords alike so callers cannot
    tell which usernames exist.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthenticated(MessagelyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class InvalidToken(MessagelyError):
    """Token signature is wrong, the token expired, or its payload is malformed."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class Forbidden(MessagelyError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class NotFound(MessagelyError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class DuplicateUsername(MessagelyError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Username already taken"


class MessageAlreadyRead(MessagelyError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Message already marked as read"

