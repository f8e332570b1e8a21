"""
Per-application state

Owns the in-memory stores and the services built on top of them.  One
instance lives on ``app.state.services``; tests build their own.
"""

from __future__ import annotations

from auth.guard import AuthGuard
from auth.service import AuthService
from config.settings import Settings
from core.task_service import TaskService
from database.stores import SessionStore, TaskStore, UserStore


class AppState:
    def __init__(self, settings: Settings):
        self.users = UserStore()
        self.sessions = SessionStore()
        self.tasks = TaskStore()

        self.guard = AuthGuard(self.users, self.sessions)
        self.auth = AuthService(
            self.users,
            self.sessions,
            self.guard,
            min_password_length=settings.min_password_length,
        )
        self.task_service = TaskService(self.tasks)
