"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from auth.guard import extract_bearer_token
from auth.service import AuthService
from core.state_manager import AppState
from core.task_service import TaskService


def get_app_state(request: Request) -> AppState:
    return request.app.state.services


def get_auth_service(state: AppState = Depends(get_app_state)) -> AuthService:
    return state.auth


def get_task_service(state: AppState = Depends(get_app_state)) -> TaskService:
    return state.task_service


async def get_session_token(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[str]:
    """Session id from ``Authorization: Bearer <id>``, or ``None``."""
    return extract_bearer_token(authorization)


async def get_current_user_id(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    state: AppState = Depends(get_app_state),
) -> str:
    """
    Run the auth guard and return the authenticated ``user_id``.

    Raises ``Unauthenticated`` (→ 401) for a missing, unknown or dangling
    session.  On success the id is also kept on ``request.state`` for the
    access log.
    """
    user_id = state.guard.resolve(token)
    request.state.user_id = user_id
    return user_id
