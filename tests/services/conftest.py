"""Service test fixtures — async DB, snapshot store + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database and a fresh JackutService
    - Service and snapshot store dependencies overridden per test
    - db_manager patched so the readiness probe sees the test database

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - httpx ASGITransport does not run the lifespan, so nothing here touches
      the developer's snapshot file
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from jackut.api.dependencies import (
    get_optional_service, get_service, get_snapshot_store,
)
from jackut.db.base import Base
from jackut.infrastructure.database import DatabaseSessionManager
from jackut.infrastructure.snapshot_store import SnapshotStore
from jackut.services.jackut_service import JackutService
import jackut.infrastructure.database as db_module
from jackut.main import app


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
def test_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def store(test_manager):
    return SnapshotStore(test_manager)


@pytest.fixture
def service():
    return JackutService()


@pytest.fixture
def seeded(service):
    """Service with maria and joao registered and logged in.

    Returns (service, maria_token, joao_token).
    """
    service.create_user("maria", "pw-maria", "Maria")
    service.create_user("joao", "pw-joao", "Joao")
    return (
        service,
        service.open_session("maria", "pw-maria"),
        service.open_session("joao", "pw-joao"),
    )


@pytest.fixture
async def client(service, store, test_manager):
    """FastAPI test client with service and store overridden."""
    app.dependency_overrides[get_service] = lambda: service
    app.dependency_overrides[get_optional_service] = lambda: service
    app.dependency_overrides[get_snapshot_store] = lambda: store

    # Patch db_manager for the readiness probe, which reads it directly
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
