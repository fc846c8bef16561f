"""
StickyBoard Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the whole suite.
How:   Service and API tests run against an in-memory SQLite database
       (aiosqlite + StaticPool) built from the ORM metadata; Gemini is
       always mocked.

Fixture Hierarchy:
    Function-scoped (fresh for each test):
    ├── db_engine: in-memory engine with foreign keys on and all tables created
    ├── db_session: AsyncSession on db_engine for service-level tests
    ├── test_app: fresh create_app() with get_db_session pointed at db_engine
    ├── test_client: HTTPX AsyncClient on a fresh app wired to db_engine
    ├── test_client_no_raise: same, but unhandled errors come back as responses
    └── mock_db_session: AsyncMock session for pure unit tests
"""

import os
import tempfile

# Must run before any app import: settings and the engine read them at import
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="stickyboard_test_"), "app.db")
)
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["BCRYPT_ROUNDS"] = "4"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.database import Base, enable_sqlite_foreign_keys, get_db_session  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine with the full schema.

    StaticPool keeps one connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine.sync_engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    Session for calling services directly.

    Usage:
        async def test_create(db_session):
            account = await account_service.create_account(db_session, "Sato", ...)
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_app(session_factory):
    """
    Fresh app with get_db_session overridden to use the in-memory database,
    keeping the same commit/rollback behavior as production.
    """
    from app.main import create_app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application = create_app()
    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to test_app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_client_no_raise(test_app):
    """
    Like test_client, but exceptions that escape the app are not re-raised in
    the test, so the 500 response a real client would get can be inspected.
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    A mock async database session for tests that must not touch a database.

    Usage:
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError):
            await note_service.get_note(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Data Helpers
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_account(db_session):
    """Factory creating accounts with unique emails."""
    from app.services.account_service import account_service

    counter = {"n": 0}

    async def _make(name: str = "Sato"):
        counter["n"] += 1
        return await account_service.create_account(
            db_session,
            name=name,
            email=f"{name.lower()}{counter['n']}@example.com",
            password="secret123",
        )

    return _make


@pytest.fixture
def make_group(db_session, make_account):
    """Factory creating a group, with a new owner account unless one is given."""
    from app.services.group_service import group_service

    async def _make(group_name: str = "Team A", owner_id=None):
        if owner_id is None:
            owner_id = (await make_account("Owner")).id
        return await group_service.create_group(
            db_session, group_name=group_name, created_by=owner_id
        )

    return _make
