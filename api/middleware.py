"""
Access-log middleware.

One INFO line per request with the user the auth guard resolved (or
``anonymous``).  Rejected sessions (401) are logged at WARNING so
repeated failures stand out.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


def request_user(request: Request) -> str:
    """User id stashed on ``request.state`` by ``get_current_user_id``."""
    return getattr(request.state, "user_id", None) or ANONYMOUS


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        response = await call_next(request)
        user = request_user(request)
        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            logger.warning("%s %s rejected (user=%s)", request.method, request.url.path, user)
        else:
            logger.info(
                "%s %s %d (user=%s)", request.method, request.url.path, response.status_code, user,
            )
        return response
