"""
Error Taxonomy
==============
Every failure a request can end in. Each class carries the HTTP status
and the machine-readable code the client sees; ``app.main`` installs the
handler that turns them into ``{"detail": {"message", "code"}}``.

Store and identity-provider internals are never put in ``message``;
they go to the log.
"""

from __future__ import annotations

from fastapi import status


class MoodTrackerError(Exception):
    """Base class for failures reported to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_detail(self) -> dict:
        return {"message": self.message, "code": self.code}


class ValidationError(MoodTrackerError):
    """Malformed or out-of-range input. Never retried."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class AuthenticationError(MoodTrackerError):
    """Missing, invalid or expired bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "auth_invalid"


class AuthorizationError(MoodTrackerError):
    """Valid caller, but not the owner of the entry."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "not_owner"


class NotFoundError(MoodTrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class InfrastructureError(MoodTrackerError):
    """Entry store or identity provider unavailable. Not retried here."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "infrastructure_error"
