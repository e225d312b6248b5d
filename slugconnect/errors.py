"""Application error taxonomy.

Services raise these; ``slugconnect.main`` turns them into ``{"detail": ...}``
JSON responses with the status code declared on each class.
"""
from __future__ import annotations

from fastapi import status


class SlugConnectError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthRequired(SlugConnectError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated. Please sign in."


class PermissionDenied(SlugConnectError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to do that"


class NotFound(SlugConnectError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationError(SlugConnectError):
    """Input rejected before it reaches the store."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class SelfConnection(ValidationError):
    default_message = "You cannot connect with yourself"


class DuplicateRequest(SlugConnectError):
    # Only escapes a service when a caller wants the raw conflict; submission maps it to a status.
    status_code = status.HTTP_409_CONFLICT
    default_message = "Connection request already exists"


class RequestNotAllowed(SlugConnectError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "A connection request cannot be sent right now"


class BackendUnavailable(SlugConnectError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "The database is unavailable. Please try again later."


class RequestFailed(SlugConnectError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "The request could not be completed"
