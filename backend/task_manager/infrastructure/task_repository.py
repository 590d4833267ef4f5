"""Task Repository — persistence gateway for the Task entity.

Invariants:
    - Every public method runs inside _guard: SQLAlchemy errors never escape raw
    - NoResultFound → RecordNotFoundError, unique IntegrityError → ConstraintViolation,
      any other SQLAlchemyError → DatabaseError
    - Writes commit before returning; failed writes roll back first
    - Ids outside the id column range are "not found" without a query (drivers
      reject them with overflow errors otherwise)
    - The UNIQUE constraint on tasks.title is the last line of defence for the
      normalized-title invariant (callers pre-check only for a friendlier message)

Design Decisions:
    - Satisfies core.repository_protocols.TaskStore structurally (no inheritance)
    - scalar_one() is the native "record not found" signal for update/delete
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.domain_types import TaskId, is_storable_task_id
from task_manager.core.errors import (
    ConstraintViolation, DatabaseError, RecordNotFoundError,
)
from task_manager.models.task import Task

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "color", "completed"})

# Driver messages for unique violations: SQLite, PostgreSQL DETAIL, PostgreSQL constraint name
_UNIQUE_FIELD_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)"),
    re.compile(r"Key \((?P<field>[^)]+)\)=\("),
    re.compile(r'unique constraint "uq_[a-z]+?_(?P<field>\w+)"'),
)


def extract_unique_field(message: str) -> str | None:
    """Name the column behind a unique violation, "field" if unknown, None if not unique."""
    for pattern in _UNIQUE_FIELD_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group("field")
    if "unique" in message.lower() or "duplicate key" in message.lower():
        return "field"
    return None


class TaskRepository:
    """Async CRUD over the tasks table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _guard(
        self, operation: str, task_id: TaskId | None = None,
    ) -> AsyncGenerator[None, None]:
        try:
            yield
        except NoResultFound as e:
            raise RecordNotFoundError("Task", task_id, operation) from e
        except IntegrityError as e:
            await self._db.rollback()
            field = extract_unique_field(str(e.orig))
            if field is None:
                logger.error(f"DB integrity error during {operation}: {e}")
                raise DatabaseError(
                    "Integrity constraint violated", operation,
                ) from e
            raise ConstraintViolation(field, operation) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"DB error during {operation}: {e}")
            raise DatabaseError("Database operation failed", operation) from e

    async def _get_one(self, task_id: TaskId) -> Task:
        if not is_storable_task_id(task_id):
            raise NoResultFound(f"Task id {task_id} is outside the id column range")
        result = await self._db.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one()

    async def list_all(self) -> Sequence[Task]:
        async with self._guard("list"):
            result = await self._db.execute(select(Task).order_by(Task.id))
            return result.scalars().all()

    async def find_by_title(self, normalized_title: str) -> Task | None:
        async with self._guard("find_by_title"):
            result = await self._db.execute(
                select(Task).where(Task.title == normalized_title),
            )
            return result.scalar_one_or_none()

    async def find_by_id(self, task_id: TaskId) -> Task | None:
        if not is_storable_task_id(task_id):
            return None
        async with self._guard("find_by_id", task_id):
            result = await self._db.execute(
                select(Task).where(Task.id == task_id),
            )
            return result.scalar_one_or_none()

    async def create(
        self, title: str, color: str, completed: bool = False,
    ) -> Task:
        async with self._guard("create"):
            task = Task(title=title, color=color, completed=completed)
            self._db.add(task)
            await self._db.commit()
            return task

    async def update(self, task_id: TaskId, fields: dict) -> Task:
        """Apply a partial update. Unknown keys are ignored; empty fields is a no-op."""
        async with self._guard("update", task_id):
            task = await self._get_one(task_id)
            changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
            if not changes:
                return task
            for key, value in changes.items():
                setattr(task, key, value)
            await self._db.commit()
            return task

    async def delete(self, task_id: TaskId) -> None:
        async with self._guard("delete", task_id):
            task = await self._get_one(task_id)
            await self._db.delete(task)
            await self._db.commit()
