"""Pytest configuration and fixtures for fleet access.

Environment is set before any fleet_access import so Settings validation
passes without a .env (DEBUG, SECRET_KEY), bcrypt stays fast, and the login
rate limiter is off unless a test turns it on.
Uses fleet_access.main:app for HTTP tests and
fleet_access.infrastructure.persistence.database for DB-dependent fixtures.
"""

import os

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from fleet_access.infrastructure.persistence import database  # noqa: E402
from fleet_access.main import app  # noqa: E402


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (postgresql+asyncpg://...). Skips (pytest.skip)
    when it is not configured. Use @pytest.mark.requires_db to mark tests
    that need this fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured: set DATABASE_URL")
    await database.init_models()
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
    await database.dispose_engine()
