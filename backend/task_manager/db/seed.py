"""Seed Script — inserts sample tasks into an empty (or partially filled) database.

Usage:
    python -m task_manager.db.seed

Invariants:
    - Titles are normalized before insert, same as the API
    - Existing titles are skipped, so the script can run repeatedly
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.config import get_settings
from task_manager.core.normalize_task import normalize_title
from task_manager.db.session import create_session_factory
from task_manager.infrastructure.observability import setup_logging
from task_manager.models.task import Task

logger = logging.getLogger(__name__)

SAMPLE_TASKS = (
    {"title": "Learn Prisma", "color": "blue", "completed": False},
    {"title": "Build Todo App", "color": "green", "completed": True},
    {"title": "Write Tests", "color": "red", "completed": False},
)


async def seed_tasks(db: AsyncSession, samples=SAMPLE_TASKS) -> int:
    """Insert samples whose normalized title is not taken yet. Returns rows inserted."""
    result = await db.execute(select(Task.title))
    taken = set(result.scalars().all())
    inserted = 0
    for sample in samples:
        title = normalize_title(sample["title"])
        if title in taken:
            continue
        db.add(Task(title=title, color=sample["color"], completed=sample["completed"]))
        taken.add(title)
        inserted += 1
    await db.commit()
    return inserted


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.resolved_log_level, settings.log_format)
    engine, factory = create_session_factory(settings.database_url)
    try:
        async with factory() as db:
            inserted = await seed_tasks(db)
        logger.info(f"Database seeded successfully! ({inserted} tasks inserted)")
    except Exception:
        logger.exception("Error seeding database")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
