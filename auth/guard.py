"""
Per-request auth gate: bearer token → user_id, or reject.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.errors import Unauthenticated
from database.stores import SessionStore, UserStore

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the session id out of an ``Authorization: Bearer <id>`` header.

    Returns ``None`` when the header is absent, lacks the ``Bearer ``
    prefix, or carries an empty token.
    """
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX):]
    return token or None


class AuthGuard:
    """
    Resolves a session id to a user id before any protected operation.

    The only side effect is on the dangling-session path: a session whose
    user no longer exists is evicted the moment it is seen.
    """

    def __init__(self, users: UserStore, sessions: SessionStore) -> None:
        self._users = users
        self._sessions = sessions

    def resolve(self, token: Optional[str]) -> str:
        if not token:
            raise Unauthenticated("Authentication required")

        user_id = self._sessions.get_user_id(token)
        if user_id is None:
            raise Unauthenticated("Invalid or expired session")

        if self._users.get(user_id) is None:
            self._sessions.delete(token)
            logger.info("Evicted dangling session for missing user %s", user_id)
            raise Unauthenticated("User not found")

        return user_id
