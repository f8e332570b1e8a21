"""
Auth API routes — signup, login, logout, whoami.

Route prefix: /auth
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_auth_service, get_session_token
from auth.service import AuthService
from utils.schemas import AuthResponse, LoginRequest, MeResponse, SignupRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user and return a fresh session."""
    return auth.signup(req.username, req.email, req.password)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with username + password."""
    return auth.login(req.username, req.password)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def logout(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> Response:
    """Drop the bearer session.  Always succeeds."""
    auth.logout(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=MeResponse)
async def whoami(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> MeResponse:
    return MeResponse(user=auth.whoami(token))
