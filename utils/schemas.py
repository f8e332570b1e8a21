"""
Pydantic schemas for the task manager: stored records, request bodies
and response payloads.

All models serialise with camelCase keys (``sessionId``, ``isComplete``,
``createdAt`` …) and accept either spelling on input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"


# ═══════════════════════════════════════════════════════════════════════════════
# Stored records
# ═══════════════════════════════════════════════════════════════════════════════


class UserRecord(CamelModel):
    """A registered account.  Never serialised to clients as-is."""

    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=_utcnow)


class TaskRecord(CamelModel):
    id: str
    user_id: str
    title: str
    description: str
    status: TaskStatus = TaskStatus.PENDING
    is_complete: bool = False
    created_at: datetime = Field(default_factory=_utcnow)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth — requests / responses
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(CamelModel):
    # Missing fields are rejected by AuthService, not here.
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    id: str
    username: str
    email: str

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(id=user.id, username=user.username, email=user.email)


class AuthResponse(CamelModel):
    user: UserResponse
    session_id: str


class MeResponse(CamelModel):
    user: UserResponse


# ═══════════════════════════════════════════════════════════════════════════════
# Tasks — requests
# ═══════════════════════════════════════════════════════════════════════════════


class TaskCreateRequest(CamelModel):
    """Body of ``POST /tasks``.  Any ``userId`` the client sends is ignored."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class TaskUpdateRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
