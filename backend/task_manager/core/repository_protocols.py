"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types

Design Decisions:
    - Protocol over ABC: structural subtyping, the ORM repository satisfies it
      without inheriting from it
"""

from typing import Protocol, Sequence

from task_manager.core.domain_types import TaskId


class TaskLike(Protocol):
    """Structural contract for Task records returned by the store."""
    id: int
    title: str
    color: str
    completed: bool


class TaskStore(Protocol):
    """Contract for task persistence — implemented by infrastructure/task_repository.py."""
    async def list_all(self) -> Sequence[TaskLike]: ...
    async def find_by_title(self, normalized_title: str) -> TaskLike | None: ...
    async def find_by_id(self, task_id: TaskId) -> TaskLike | None: ...
    async def create(
        self, title: str, color: str, completed: bool = False,
    ) -> TaskLike: ...
    async def update(self, task_id: TaskId, fields: dict) -> TaskLike: ...
    async def delete(self, task_id: TaskId) -> None: ...
