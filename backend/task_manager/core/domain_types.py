"""Domain Types — identity wrappers and enums shared across layers.

Invariants:
    - TaskId is a plain int at runtime (NewType is erased)
    - Length and id bounds here match models/task.py and the 001 migration
    - Environment values match the ENVIRONMENT variable accepted by Settings
"""

from enum import Enum
from typing import NewType

TaskId = NewType("TaskId", int)


class Environment(str, Enum):
    """Deployment mode; drives log verbosity and error detail."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


# Storage bounds: tasks.id is a 32-bit INTEGER, title/color are VARCHAR
TASK_ID_MIN = 1
TASK_ID_MAX = 2**31 - 1
TITLE_MAX_LENGTH = 255
COLOR_MAX_LENGTH = 50


def is_storable_task_id(task_id: int) -> bool:
    """True when task_id fits the id column; anything else cannot exist."""
    return TASK_ID_MIN <= task_id <= TASK_ID_MAX
