"""Error Hierarchy — typed, categorized exceptions for all task manager failure modes.

Invariants:
    - Every domain error has a code (str), category (ErrorCategory), severity and http_status
    - Domain errors carry the exact message shown to the client
    - Storage errors (DatabaseError family) never reach the client verbatim;
      the translator in api/error_handlers.py picks the public message

Design Decisions:
    - Two families instead of one: TaskManagerError is raised by handlers on purpose,
      DatabaseError is raised by the persistence gateway when the engine refuses an operation
    - No envelope code here: api/responses.py owns the response shape
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class TaskManagerError(Exception):
    """Base exception for errors raised deliberately by the domain."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 400,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(TaskManagerError):
    """Request payload failed schema validation."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class DuplicateError(TaskManagerError):
    """A task with the same normalized title already exists."""
    def __init__(
        self,
        message: str = (
            "A task with this title already exists. Please use a unique title"
        ),
    ):
        super().__init__(
            message, "DUPLICATE_TASK", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 400,
        )


class NotFoundError(TaskManagerError):
    """Referenced task does not exist."""
    def __init__(self, resource_type: str = "Task", resource_id: object = None):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Storage Errors (raised by the persistence gateway) ─────────

class DatabaseError(Exception):
    """Database operation failed."""

    code = "DATABASE_ERROR"

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.message = message
        self.operation = operation


class ConstraintViolation(DatabaseError):
    """Unique constraint rejected a write."""

    code = "CONSTRAINT_VIOLATION"

    def __init__(self, field: str, operation: str = "commit"):
        super().__init__(f"unique constraint violated on {field}", operation)
        self.field = field


class RecordNotFoundError(DatabaseError):
    """Row targeted by a write does not exist."""

    code = "RECORD_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: object, operation: str):
        super().__init__(
            f"{resource_type} {resource_id!r} does not exist", operation,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
