"""Task ORM — persists a single to-do record.

Invariants:
    - id is an autoincrement integer primary key
    - title is stored normalized (trimmed, lower-cased) and is UNIQUE
    - completed is non-nullable, defaults to False

Design Decisions:
    - Named unique constraint: migrations and error messages reference it by name
    - Normalization happens before the ORM (core/normalize_task.py); the model stores what it is given
"""

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.core.domain_types import COLOR_MAX_LENGTH, TITLE_MAX_LENGTH
from task_manager.db.base import Base


class Task(Base):
    """Task entity — title, color, completion flag."""
    __tablename__ = "tasks"
    __table_args__ = (UniqueConstraint("title", name="uq_tasks_title"),)

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    color: Mapped[str] = mapped_column(String(COLOR_MAX_LENGTH), nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r}>"
