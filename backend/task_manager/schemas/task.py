"""Task Schemas — Pydantic models and the validation entry point for task payloads.

Invariants:
    - TaskCreate.title: stripped, non-empty, at most TITLE_MAX_LENGTH chars;
      color: string of at most COLOR_MAX_LENGTH chars; completed: strict bool, optional
    - TaskUpdate: every field optional, explicit null rejected, unknown fields ignored
    - parse_task_input raises core.errors.ValidationError carrying the FIRST violation only

Design Decisions:
    - Bodies are validated here, not by FastAPI's signature binding, so update
      can check existence before validating
    - PydanticCustomError for domain messages: error["msg"] is the exact text shown to clients
"""

from typing import Any

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, ValidationError as PydanticValidationError,
    ValidationInfo, field_validator,
)
from pydantic_core import PydanticCustomError

from task_manager.core.domain_types import COLOR_MAX_LENGTH, TITLE_MAX_LENGTH
from task_manager.core.errors import ValidationError

# Error types produced by our own validators; their msg is already client-ready
_CUSTOM_ERROR_TYPES = frozenset({"title_required", "field_not_null"})


def _require_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("title_required", "Title is required")
    return value


class TaskCreate(BaseModel):
    """Task creation — title and color required."""
    model_config = ConfigDict(extra="ignore")

    title: str = Field(max_length=TITLE_MAX_LENGTH)
    color: str = Field(max_length=COLOR_MAX_LENGTH)
    completed: StrictBool | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _require_title(v)


class TaskUpdate(BaseModel):
    """Partial task update — any subset of fields."""
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(None, max_length=TITLE_MAX_LENGTH)
    color: str | None = Field(None, max_length=COLOR_MAX_LENGTH)
    completed: StrictBool | None = None

    @field_validator("title", "color", "completed", mode="before")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise PydanticCustomError(
                "field_not_null", "{field} cannot be null",
                {"field": info.field_name},
            )
        return v

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _require_title(v)

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskRead(BaseModel):
    """Task response — public-facing task data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    color: str
    completed: bool


def _first_error_message(exc: PydanticValidationError) -> tuple[str, str | None]:
    error = exc.errors()[0]
    field = ".".join(str(loc) for loc in error["loc"]) or None
    if error["type"] in _CUSTOM_ERROR_TYPES:
        return error["msg"], field
    if error["type"] == "missing" and field:
        return f"{field.capitalize()} is required", field
    if field is None:
        return "Request body must be a JSON object", None
    return f"{field}: {error['msg']}", field


def parse_task_input(payload: Any, partial: bool = False) -> TaskCreate | TaskUpdate:
    """Validate an untyped request body against TaskCreate (or TaskUpdate when partial)."""
    schema = TaskUpdate if partial else TaskCreate
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        message, field = _first_error_message(e)
        raise ValidationError(message, field=field) from e
