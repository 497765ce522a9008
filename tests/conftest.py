"""Pytest configuration and fixtures for the workflow engine.

DB-dependent fixtures run against an in-memory SQLite database
(sqlite+aiosqlite) with the schema created from the ORM metadata, so no
external Postgres is needed. HTTP tests use app.main:create_app with the
session dependencies overridden and outbound webhooks answered by an
httpx.MockTransport.
"""

from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.infrastructure.persistence.models  # noqa: F401  (register tables on Base.metadata)
from app.infrastructure.persistence.database import Base, get_db, get_db_transactional
from app.main import create_app

TENANT_ID = "tenant-acme"
OTHER_TENANT_ID = "tenant-globex"
FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=UTC)


@pytest.fixture
def tenant_id() -> str:
    return TENANT_ID


@pytest.fixture
def other_tenant_id() -> str:
    return OTHER_TENANT_ID


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Deterministic clock for services that accept one."""
    return lambda: FIXED_NOW


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory SQLite database per test, schema created from metadata.

    pysqlite's own transaction handling is disabled so SAVEPOINTs
    (begin_nested) behave as they do on PostgreSQL.
    """
    eng = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(eng.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


class WebhookRecorder:
    """Collects outbound webhook requests; answers with status_code or raises error."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.error: httpx.HTTPError | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={"received": True})


@pytest.fixture
def webhook_recorder() -> WebhookRecorder:
    return WebhookRecorder()


@pytest.fixture
async def webhook_http_client(
    webhook_recorder: WebhookRecorder,
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(webhook_recorder)
    ) as http_client:
        yield http_client


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    webhook_http_client: httpx.AsyncClient,
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) backed by the SQLite engine."""
    app = create_app()

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _get_db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    app.state.webhook_http_client = webhook_http_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
