"""Task Routes — HTTP surface for task CRUD.

Invariants:
    - Bodies arrive untyped; TaskService validates them (update checks existence first)
    - Responses use the success envelope; failures propagate to api/error_handlers.py
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.api.responses import send_success
from task_manager.core.domain_types import TaskId
from task_manager.infrastructure.database import get_db
from task_manager.infrastructure.task_repository import TaskRepository
from task_manager.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(TaskRepository(db))


@router.get("")
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """Return every task."""
    tasks = await service.list_tasks()
    return send_success(tasks, "Tasks retrieved successfully")


@router.post("")
async def create_task(
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
):
    """Create a task with a unique (normalized) title."""
    task = await service.create_task(payload)
    return send_success(
        task, "Task created successfully", status.HTTP_201_CREATED,
    )


@router.api_route("/{task_id}", methods=["PUT", "PATCH"])
async def update_task(
    task_id: int,
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
):
    """Partially update a task."""
    # An empty request body is an empty update, not an invalid one
    task = await service.update_task(
        TaskId(task_id), {} if payload is None else payload,
    )
    return send_success(task, "Task updated successfully")


@router.delete("/{task_id}")
async def delete_task(
    task_id: int, service: TaskService = Depends(get_task_service),
):
    """Delete a task by id."""
    await service.delete_task(TaskId(task_id))
    return send_success(None, "Task deleted successfully")
