"""Task Service — list/create/update/delete handlers for the Task entity.

Invariants:
    - create: validate → normalize title → duplicate pre-check → insert
    - update/delete: existence check by id BEFORE validating or writing
    - Returned tasks are TaskRead snapshots, never live ORM objects
    - Every outcome is logged (info on success, warning on rejected input)

Design Decisions:
    - Duplicate pre-check kept for the friendlier message; the unique constraint in
      the repository still catches the race between pre-check and insert
      (ConstraintViolation → 400 in the error translator)
    - Store injected as TaskStore protocol; logger injectable for tests and scripts
"""

import logging
from typing import Any

from task_manager.core.domain_types import TaskId
from task_manager.core.errors import DuplicateError, NotFoundError
from task_manager.core.normalize_task import normalize_changes, normalize_title
from task_manager.core.repository_protocols import TaskStore
from task_manager.schemas.task import TaskRead, parse_task_input

module_logger = logging.getLogger(__name__)


class TaskService:
    """Entity handlers for tasks."""

    def __init__(self, store: TaskStore, logger: logging.Logger | None = None):
        self._store = store
        self._logger = logger or module_logger

    async def list_tasks(self) -> list[TaskRead]:
        tasks = await self._store.list_all()
        self._logger.info(f"Fetched {len(tasks)} tasks successfully.")
        return [TaskRead.model_validate(t) for t in tasks]

    async def create_task(self, payload: Any) -> TaskRead:
        data = parse_task_input(payload)
        title = normalize_title(data.title)

        if await self._store.find_by_title(title):
            self._logger.warning(f"Duplicate task title rejected: {title!r}")
            raise DuplicateError()

        task = await self._store.create(
            title, data.color, completed=bool(data.completed),
        )
        self._logger.info(
            f"Created a new task with ID: {task.id}",
            extra={"task_id": task.id},
        )
        return TaskRead.model_validate(task)

    async def update_task(self, task_id: TaskId, payload: Any) -> TaskRead:
        await self._require_task(task_id, "update")

        changes = normalize_changes(parse_task_input(payload, partial=True).changes())
        task = await self._store.update(task_id, changes)
        self._logger.info(
            f"Task with ID {task_id} updated successfully.",
            extra={"task_id": task_id},
        )
        return TaskRead.model_validate(task)

    async def delete_task(self, task_id: TaskId) -> None:
        await self._require_task(task_id, "deletion")

        await self._store.delete(task_id)
        self._logger.info(
            f"Task with ID {task_id} deleted successfully.",
            extra={"task_id": task_id},
        )

    async def _require_task(self, task_id: TaskId, action: str) -> None:
        if await self._store.find_by_id(task_id) is None:
            self._logger.warning(f"Task with ID {task_id} not found for {action}.")
            raise NotFoundError("Task", task_id)
