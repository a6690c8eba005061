"""Shared pytest fixtures for API tests and database isolation."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from reliva.api.deps import get_db, get_preferences_db
from reliva.core.config import PROVIDER_KEY_FIELDS, settings
from reliva.db.base import Base
from reliva.main import app
from reliva.services.document_store import DocumentStore
from reliva.sources import reset_adapters
from reliva.sources.observability import source_monitor
from reliva.tests.utils import FakeUpstream


@pytest.fixture(autouse=True)
def _unset_provider_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in PROVIDER_KEY_FIELDS:
        monkeypatch.setattr(settings, key, None)


@pytest_asyncio.fixture(autouse=True)
async def _fresh_sources():
    reset_adapters()
    await source_monitor.reset()
    yield
    reset_adapters()


@pytest.fixture()
def upstream(monkeypatch: pytest.MonkeyPatch) -> FakeUpstream:
    fake = FakeUpstream()
    monkeypatch.setattr("reliva.sources.base.fetch_json", fake)
    return fake


@pytest_asyncio.fixture()
async def session() -> AsyncSession:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    TestingSession = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    try:
        async with TestingSession() as session:
            yield session
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def store(session: AsyncSession) -> DocumentStore:
    return DocumentStore(session)


@pytest_asyncio.fixture()
async def client(session: AsyncSession) -> AsyncClient:
    async def _get_test_db():
        yield session

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_preferences_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_preferences_db, None)
