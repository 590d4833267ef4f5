"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine
    - db_manager patched so readiness probes see the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the unique constraint
      behaves the same as on PostgreSQL for what these tests exercise
"""

import os

# Must run before task_manager.main builds the module-level app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

import task_manager.infrastructure.database as db_module  # noqa: E402
from task_manager.db.base import Base  # noqa: E402
from task_manager.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
from task_manager.main import app  # noqa: E402
import task_manager.models  # noqa: E402, F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_db_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine, without building a new one."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_session_factory, fake_db_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = fake_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def create_task(client):
    """POST a task and return the created record."""
    async def _create(title: str, color: str = "blue", **extra):
        res = await client.post("/tasks", json={"title": title, "color": color, **extra})
        assert res.status_code == 201, res.json()
        return res.json()["data"]
    return _create
