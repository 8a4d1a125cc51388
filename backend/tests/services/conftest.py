"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine
    - Rate limiter disabled unless a test requests `enabled_limiter`

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the schema
      created by the fixture is visible to every session the app opens
    - register_user goes through the real /register route: tokens in tests are
      minted exactly as in production
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from mini_notes.db.base import Base
import mini_notes.models  # noqa: F401
from mini_notes.infrastructure.database import get_db, DatabaseSessionManager
from mini_notes.infrastructure.rate_limiter import limiter
import mini_notes.infrastructure.database as db_module
from mini_notes.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def enabled_limiter():
    """Turn the fixed-window limiter on with empty counters for one test."""
    limiter.reset()
    limiter.enabled = True
    yield limiter
    limiter.enabled = False
    limiter.reset()


@pytest.fixture
def auth_headers():
    """Factory: Authorization header for a bearer token."""
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def register_user(client):
    """Factory: register through the API, return the response JSON."""
    async def _register(
        username: str = "alice",
        email: str = "alice@example.com",
        password: str = "correct-horse",
    ) -> dict:
        res = await client.post("/api/auth/register", json={
            "username": username,
            "email": email,
            "password": password,
            "tosAccepted": True,
        })
        assert res.status_code == 201, res.text
        return res.json()
    return _register


@pytest.fixture
async def alice(register_user):
    return await register_user()


@pytest.fixture
async def bob(register_user):
    return await register_user("bob", "bob@example.com", "bob-password-1")
