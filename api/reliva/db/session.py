"""Async engines and session factories for the document stores.

Users, profiles and notifications live behind ``DATABASE_URL``; onboarding
preferences may be pointed at a separate store with
``PREFERENCES_DATABASE_URL``.
"""

from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from reliva.core.config import settings
from reliva.db.base import Base

_ENGINES: dict[str, AsyncEngine] = {}
_SESSION_FACTORIES: dict[str, async_sessionmaker[AsyncSession]] = {}


def get_engine(url: str) -> AsyncEngine:
    """Return a cached engine for a database URL."""
    if url not in _ENGINES:
        _ENGINES[url] = create_async_engine(url, future=True)
    return _ENGINES[url]


def _session_factory(url: str) -> async_sessionmaker[AsyncSession]:
    if url not in _SESSION_FACTORIES:
        _SESSION_FACTORIES[url] = async_sessionmaker(get_engine(url), expire_on_commit=False, class_=AsyncSession)
    return _SESSION_FACTORIES[url]


async def get_session() -> AsyncIterator[AsyncSession]:
    async with _session_factory(settings.database_url)() as session:
        yield session


async def get_preferences_session() -> AsyncIterator[AsyncSession]:
    async with _session_factory(settings.effective_preferences_database_url)() as session:
        yield session


async def init_models() -> None:
    """Create the documents table on every configured store."""
    urls = {settings.database_url, settings.effective_preferences_database_url}
    for url in urls:
        async with get_engine(url).begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


async def dispose_engines() -> None:
    for engine in _ENGINES.values():
        await engine.dispose()
    _ENGINES.clear()
    _SESSION_FACTORIES.clear()
