"""
Shared fixtures for the workout log tests.

- Database: in-memory SQLite (aiosqlite) with foreign keys on, so cascade and
  restrict rules behave like PostgreSQL. The BEGIN/isolation_level recipe
  gives SQLite working SAVEPOINTs (used by the catalog get-or-create).
- HTTP: the real application with get_db overridden to the test session;
  callers authenticate with tokens from create_access_token().
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401 - register all models
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ALICE = "user_alice"
BOB = "user_bob"


def make_auth_headers(caller_id: str) -> dict:
    """Authorization header with a valid bearer token for `caller_id`."""
    return {"Authorization": f"Bearer {create_access_token(caller_id)}"}


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # let SQLAlchemy emit BEGIN itself (savepoints), and enforce FKs
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------


@pytest.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated client against the real app, bound to the test session."""
    from app.main import create_application

    application = create_application()

    async def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=application),
        base_url="http://test",
    ) as ac:
        yield ac
    application.dependency_overrides.clear()


@pytest.fixture
def alice_headers() -> dict:
    return make_auth_headers(ALICE)


@pytest.fixture
def bob_headers() -> dict:
    return make_auth_headers(BOB)
