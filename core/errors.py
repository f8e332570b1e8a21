"""
Domain error taxonomy.

The core raises these; ``api/errors.py`` turns them into HTTP responses.
Every kind is terminal for the current request.
"""

from __future__ import annotations


class TaskManagerError(Exception):
    """Base class for every error the core reports to a caller."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskManagerError):
    """Missing or malformed input; the client must fix and resend."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(TaskManagerError):
    """Duplicate identity (username or email already taken)."""

    status_code = 409
    default_message = "Username or email already exists"


class AuthError(TaskManagerError):
    """Bad credentials or a bad session; the client must re-authenticate."""

    status_code = 401
    default_message = "Not authenticated"


class Unauthenticated(AuthError):
    """Raised by the auth guard before a protected operation runs."""

    default_message = "Authentication required"


class NotFound(TaskManagerError):
    """Resource absent *or* owned by someone else — the two are not distinguished."""

    status_code = 404
    default_message = "Not found"
