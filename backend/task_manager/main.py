"""Task Manager API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - A single error translator (api/error_handlers.py) answers every failure
    - Every request is logged as "[METHOD] path" before it is handled
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - create_app(settings) factory: tests build apps with other settings;
      the module-level app is what uvicorn serves
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from task_manager.api.error_handlers import register_error_handlers
from task_manager.api.routes import health, root, tasks
from task_manager.config import Settings, get_settings
from task_manager.infrastructure.database import close_db, init_db
from task_manager.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(
            settings.resolved_log_level, settings.log_format, settings.log_dir,
        )
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_tables:
            await manager.create_tables()
        logger.info(f"Server running on http://{settings.host}:{settings.port}")
        logger.info(f"Environment: {settings.environment.value}")
        yield
        await close_db()
        logger.info("Task Manager API shutting down")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(
        title="Task Manager API", version="1.0.0",
        lifespan=_build_lifespan(settings),
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def log_requests(request: Request, call_next):
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        logger.info(
            f"[{request.method}] {target}",
            extra={"method": request.method, "path": request.url.path},
        )
        return await call_next(request)

    # Routes — explicit registration
    application.include_router(root.router)
    application.include_router(health.router)
    application.include_router(tasks.router)

    register_error_handlers(application, settings)
    return application


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "task_manager.main:app", host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    run()
