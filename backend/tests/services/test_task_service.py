"""Task Service — handler ordering and logging against a real (SQLite) repository.

Invariants:
    - Existence checks run before validation on update
    - Duplicate pre-check raises DuplicateError without touching the store
    - Concurrent-style duplicates that slip past the pre-check surface as ConstraintViolation
"""

import logging
from unittest.mock import AsyncMock

import pytest

from task_manager.core.errors import (
    ConstraintViolation, DuplicateError, NotFoundError, ValidationError,
)
from task_manager.infrastructure.task_repository import TaskRepository
from task_manager.services.task_service import TaskService


@pytest.fixture
def repository(test_db):
    return TaskRepository(test_db)


@pytest.fixture
def service(repository):
    return TaskService(repository)


async def test_create_normalizes_and_persists(service, repository):
    task = await service.create_task({"title": " Learn Prisma ", "color": "blue"})

    assert task.title == "learn prisma"
    stored = await repository.find_by_id(task.id)
    assert stored.title == "learn prisma"


async def test_create_passes_completed_through(service):
    task = await service.create_task({"title": "done", "color": "x", "completed": True})
    assert task.completed is True


async def test_create_duplicate_raises_before_insert(repository):
    await repository.create("learn prisma", "blue")
    store = AsyncMock(wraps=repository)
    service = TaskService(store)

    with pytest.raises(DuplicateError):
        await service.create_task({"title": "LEARN PRISMA", "color": "red"})

    store.create.assert_not_called()


async def test_create_race_past_precheck_hits_constraint(repository):
    await repository.create("racy", "blue")
    store = AsyncMock(wraps=repository)
    # Simulate the other request inserting between pre-check and insert
    store.find_by_title.return_value = None
    service = TaskService(store)

    with pytest.raises(ConstraintViolation) as exc_info:
        await service.create_task({"title": "Racy", "color": "red"})

    assert exc_info.value.field == "title"


async def test_create_invalid_payload_persists_nothing(service, repository):
    with pytest.raises(ValidationError):
        await service.create_task({"title": "", "color": "blue"})

    assert await repository.list_all() == []


async def test_list_logs_count(service, caplog):
    await service.create_task({"title": "one", "color": "c"})
    await service.create_task({"title": "two", "color": "c"})

    with caplog.at_level(logging.INFO, logger="task_manager.services.task_service"):
        tasks = await service.list_tasks()

    assert [t.title for t in tasks] == ["one", "two"]
    assert "Fetched 2 tasks successfully." in caplog.messages


async def test_update_checks_existence_before_validation(service):
    with pytest.raises(NotFoundError):
        await service.update_task(404, {"completed": "garbage"})


async def test_update_validates_payload(service):
    task = await service.create_task({"title": "valid", "color": "c"})

    with pytest.raises(ValidationError):
        await service.update_task(task.id, {"completed": "garbage"})


async def test_update_empty_payload_is_noop(service):
    task = await service.create_task({"title": "same", "color": "c"})

    updated = await service.update_task(task.id, {})

    assert updated == task


async def test_delete_missing_raises_not_found(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.delete_task(77)
    assert exc_info.value.message == "Task not found"


async def test_delete_removes_task(service, repository):
    task = await service.create_task({"title": "bye", "color": "c"})

    assert await service.delete_task(task.id) is None
    assert await repository.find_by_id(task.id) is None


async def test_injected_logger_is_used(repository, caplog):
    custom = logging.getLogger("tests.custom_task_logger")
    service = TaskService(repository, logger=custom)

    with caplog.at_level(logging.INFO, logger="tests.custom_task_logger"):
        await service.create_task({"title": "logged", "color": "c"})

    assert any(r.name == "tests.custom_task_logger" for r in caplog.records)
