"""
Auth service — signup, login, logout, whoami.

Sessions are opaque random tokens recorded in the ``SessionStore``.  They
never expire; a user may hold any number of them at once.
"""

from __future__ import annotations

import logging
import secrets
import uuid
from typing import Optional

from auth.guard import AuthGuard
from auth.password import hash_password, verify_password
from core.errors import AuthError, ConflictError, ValidationError
from database.stores import SessionStore, UserStore
from utils.schemas import AuthResponse, UserRecord, UserResponse

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Invalid username or password"


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class AuthService:
    def __init__(
        self,
        users: UserStore,
        sessions: SessionStore,
        guard: AuthGuard | None = None,
        *,
        min_password_length: int = 6,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._guard = guard or AuthGuard(users, sessions)
        self._min_password_length = min_password_length

    # ── helpers ─────────────────────────────────────────────────────────

    def _open_session(self, user: UserRecord) -> AuthResponse:
        session_id = new_session_id()
        self._sessions.add(session_id, user.id)
        return AuthResponse(user=UserResponse.from_record(user), session_id=session_id)

    # ── operations ──────────────────────────────────────────────────────

    def signup(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResponse:
        """Create an account and log it in."""
        if not username or not email or not password:
            raise ValidationError("Username, email, and password are required")
        if len(password) < self._min_password_length:
            raise ValidationError(
                f"Password must be at least {self._min_password_length} characters"
            )
        if self._users.find_conflict(username, email) is not None:
            raise ConflictError("Username or email already exists")

        user = UserRecord(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        self._users.add(user)
        logger.info("Registered user %s (%s)", username, user.id)
        return self._open_session(user)

    def login(self, username: Optional[str], password: Optional[str]) -> AuthResponse:
        """
        Verify credentials and issue a new session.

        Unknown username and wrong password produce the same error so the
        response cannot be used to enumerate accounts.  Earlier sessions of
        the same user stay valid.
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = self._users.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for username %r", username)
            raise AuthError(_INVALID_CREDENTIALS)

        logger.info("Login: %s (%s)", user.username, user.id)
        return self._open_session(user)

    def logout(self, session_id: Optional[str]) -> None:
        """Drop the session if present.  Idempotent, never fails."""
        if session_id and self._sessions.delete(session_id):
            logger.info("Session closed")

    def whoami(self, session_id: Optional[str]) -> UserResponse:
        user_id = self._guard.resolve(session_id)
        user = self._users.get(user_id)
        if user is None:
            raise AuthError("User not found")
        return UserResponse.from_record(user)
