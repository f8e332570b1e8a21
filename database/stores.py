"""
In-memory stores — users, sessions and tasks.

Each store is a plain dict owned by one ``AppState`` instance, so every
application (and every test) gets isolated state.  Nothing here is
durable.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from utils.schemas import TaskRecord, UserRecord

logger = logging.getLogger(__name__)


class UserStore:
    """Credential store: user_id → ``UserRecord``."""

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}

    def add(self, user: UserRecord) -> None:
        self._users[user.id] = user

    def get(self, user_id: str) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def find_conflict(self, username: str, email: str) -> Optional[UserRecord]:
        """Return the first user sharing *username* or *email* (exact match)."""
        for user in self._users.values():
            if user.username == username or user.email == email:
                return user
        return None

    def remove(self, user_id: str) -> bool:
        """Drop a user record.  No route exposes this; sessions are left to the guard."""
        return self._users.pop(user_id, None) is not None

    def __len__(self) -> int:
        return len(self._users)


class SessionStore:
    """Session store: session_id → user_id."""

    def __init__(self) -> None:
        self._sessions: Dict[str, str] = {}

    def add(self, session_id: str, user_id: str) -> None:
        self._sessions[session_id] = user_id

    def get_user_id(self, session_id: str) -> Optional[str]:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


class TaskStore:
    """Task store: task_id → ``TaskRecord``.  Insertion order is preserved."""

    def __init__(self) -> None:
        self._tasks: Dict[str, TaskRecord] = {}

    def add(self, task: TaskRecord) -> None:
        self._tasks[task.id] = task

    def list_for_user(self, user_id: str) -> List[TaskRecord]:
        return [t for t in self._tasks.values() if t.user_id == user_id]

    def find_owned(self, task_id: str, user_id: str) -> Optional[TaskRecord]:
        """Return the task only if it exists AND belongs to *user_id*."""
        task = self._tasks.get(task_id)
        if task is None or task.user_id != user_id:
            return None
        return task

    def replace(self, task: TaskRecord) -> None:
        self._tasks[task.id] = task

    def delete_owned(self, task_id: str, user_id: str) -> bool:
        if self.find_owned(task_id, user_id) is None:
            return False
        del self._tasks[task_id]
        return True

    def __len__(self) -> int:
        return len(self._tasks)
