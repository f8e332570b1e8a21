"""
Task API routes.  Every endpoint runs the auth guard first.

Route prefix: /tasks
"""

from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_current_user_id, get_task_service
from core.task_service import TaskService
from utils.schemas import TaskCreateRequest, TaskRecord, TaskUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])

health_router = APIRouter(tags=["health"])


@health_router.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


@router.get("", response_model=List[TaskRecord])
async def list_tasks(
    user_id: str = Depends(get_current_user_id),
    tasks: TaskService = Depends(get_task_service),
) -> List[TaskRecord]:
    """All tasks owned by the authenticated user."""
    return tasks.list_tasks(user_id)


@router.post("", response_model=TaskRecord, status_code=status.HTTP_201_CREATED)
async def create_task(
    req: TaskCreateRequest,
    user_id: str = Depends(get_current_user_id),
    tasks: TaskService = Depends(get_task_service),
) -> TaskRecord:
    return tasks.create_task(user_id, req.title, req.description, req.status)


@router.get("/{task_id}", response_model=TaskRecord)
async def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    tasks: TaskService = Depends(get_task_service),
) -> TaskRecord:
    return tasks.get_task(user_id, task_id)


@router.put("/{task_id}", response_model=TaskRecord)
async def update_task(
    task_id: str,
    req: TaskUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    tasks: TaskService = Depends(get_task_service),
) -> TaskRecord:
    """Partial update — omitted or empty fields keep their current value."""
    return tasks.update_task(
        user_id, task_id, title=req.title, description=req.description, status=req.status,
    )


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    tasks: TaskService = Depends(get_task_service),
) -> Response:
    tasks.delete_task(user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/complete", response_model=TaskRecord)
async def toggle_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    tasks: TaskService = Depends(get_task_service),
) -> TaskRecord:
    """Flip completion; status follows (complete ↔ pending)."""
    return tasks.toggle_task(user_id, task_id)
