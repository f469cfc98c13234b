"""Error types raised by the profile service and their HTTP mapping."""
from __future__ import annotations

from typing import Dict

from fastapi import status


class ProfileServiceError(RuntimeError):
    """Base class for request-level failures in the profile service."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    payload_key: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, str]:
        return {self.payload_key: self.message}


class ValidationError(ProfileServiceError):
    """Raised when required input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ProfileServiceError):
    """Raised when a user with the same name already exists."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "User already exists.") -> None:
        super().__init__(message)


class NotFoundError(ProfileServiceError):
    """Raised by the fetch endpoint when the collection is empty."""

    status_code = status.HTTP_404_NOT_FOUND
    payload_key = "msg"

    def __init__(self, message: str = "No users found.") -> None:
        super().__init__(message)


class InternalError(ProfileServiceError):
    """Wraps an unexpected failure; the message is safe to return to callers."""

    def __init__(self, message: str = "Internal Server Error", *, payload_key: str = "err") -> None:
        super().__init__(message)
        self.payload_key = payload_key


__all__ = [
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "ProfileServiceError",
    "ValidationError",
]
