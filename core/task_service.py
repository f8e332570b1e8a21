"""
Task operations scoped to the requesting user.

Every call takes the ``user_id`` resolved by the auth guard.  A task that
exists but belongs to another user is reported exactly like a task that
does not exist.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from core.errors import NotFound, ValidationError
from database.stores import TaskStore
from utils.schemas import TaskRecord, TaskStatus

logger = logging.getLogger(__name__)

_NOT_FOUND = "Task not found or access denied"


def _parse_status(value: str) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(f"Invalid status '{value}' (expected one of: {allowed})") from None


class TaskService:
    def __init__(self, tasks: TaskStore) -> None:
        self._tasks = tasks

    def _owned(self, user_id: str, task_id: str) -> TaskRecord:
        task = self._tasks.find_owned(task_id, user_id)
        if task is None:
            raise NotFound(_NOT_FOUND)
        return task

    def list_tasks(self, user_id: str) -> List[TaskRecord]:
        return self._tasks.list_for_user(user_id)

    def get_task(self, user_id: str, task_id: str) -> TaskRecord:
        return self._owned(user_id, task_id)

    def create_task(
        self,
        user_id: str,
        title: Optional[str],
        description: Optional[str],
        status: Optional[str] = None,
    ) -> TaskRecord:
        if not title or not description:
            raise ValidationError("Title and description are required")

        task = TaskRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            description=description,
            status=_parse_status(status) if status else TaskStatus.PENDING,
            is_complete=False,
        )
        self._tasks.add(task)
        logger.debug("Created task %s for user %s", task.id, user_id)
        return task

    def update_task(
        self,
        user_id: str,
        task_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> TaskRecord:
        """
        Overwrite title/description/status with whichever values are truthy.

        Omitted or empty fields keep their previous value.  ``is_complete``
        is left untouched.
        """
        new_status = _parse_status(status) if status else None
        task = self._owned(user_id, task_id)

        updated = task.model_copy(
            update={
                "title": title or task.title,
                "description": description or task.description,
                "status": new_status or task.status,
            }
        )
        self._tasks.replace(updated)
        return updated

    def delete_task(self, user_id: str, task_id: str) -> None:
        if not self._tasks.delete_owned(task_id, user_id):
            raise NotFound(_NOT_FOUND)
        logger.debug("Deleted task %s for user %s", task_id, user_id)

    def toggle_task(self, user_id: str, task_id: str) -> TaskRecord:
        """
        Flip ``is_complete`` and mirror it into ``status``.

        Only ``complete`` and ``pending`` are produced; an ``in-progress``
        task toggles straight to ``complete`` (or ``pending`` if it was
        already marked complete).
        """
        task = self._owned(user_id, task_id)
        is_complete = not task.is_complete
        updated = task.model_copy(
            update={
                "is_complete": is_complete,
                "status": TaskStatus.COMPLETE if is_complete else TaskStatus.PENDING,
            }
        )
        self._tasks.replace(updated)
        return updated
