"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, path, status_code, error_code, task_id) surfaced when present
    - setup_logging is idempotent: handlers it installed earlier are replaced, not stacked

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Rotating files are opt-in (log_dir): containers log to stdout
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
EXTRA_FIELDS = ("method", "path", "status_code", "error_code", "task_id")

# Marker attribute so repeated setup_logging calls can find their own handlers
_HANDLER_TAG = "_task_manager_handler"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def _build_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _rotating_handler(
    log_dir: str, name: str, level: int, backup_count: int,
) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(
        os.path.join(log_dir, f"{name}.log"),
        when="midnight",
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    return handler


def setup_logging(
    level: str = "INFO", fmt: str = "json", log_dir: str | None = None,
) -> None:
    """Configure root logging for the application."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_TAG, False):
            root.removeHandler(existing)
            existing.close()

    formatter = _build_formatter(fmt)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(_rotating_handler(log_dir, "info", logging.INFO, 14))
        handlers.append(_rotating_handler(log_dir, "error", logging.ERROR, 30))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
