import asyncio
from typing import AsyncIterator, get_type_hints

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm.exc import StaleDataError

from reliva.api.deps import get_db, get_preferences_db
from reliva.core.config import settings
from reliva.db.base import Base
from reliva.db.session import dispose_engines
from reliva.services.document_store import DocumentStore


@pytest_asyncio.fixture()
async def shared_stores(tmp_path):
    """Two stores on separate sessions over one file-backed database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    try:
        async with factory() as first, factory() as second:
            yield DocumentStore(first), DocumentStore(second)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_set_merge_and_update(store):
    await store.set("users", "u1", {"a": 1, "b": 2})
    await store.set("users", "u1", {"b": 3}, merge=True)
    assert await store.get("users", "u1") == {"a": 1, "b": 3}

    await store.set("users", "u1", {"c": 4})
    assert await store.get("users", "u1") == {"c": 4}

    assert await store.update("users", "u1", {"d": 5}) is True
    assert await store.update("users", "missing", {"d": 5}) is False
    assert await store.get("users", "missing") is None


@pytest.mark.asyncio
async def test_array_union_and_remove(store):
    await store.set("users", "u1", {"following": ["x"]})

    await store.array_union("users", "u1", "following", "y")
    await store.array_union("users", "u1", "following", "y")
    assert (await store.get("users", "u1"))["following"] == ["x", "y"]

    await store.array_remove("users", "u1", "following", "x")
    assert (await store.get("users", "u1"))["following"] == ["y"]
    assert await store.array_union("users", "missing", "following", "y") is False


@pytest.mark.asyncio
async def test_add_and_find_by_field(store):
    first = await store.add("notifications", {"toUserId": "u2"})
    await store.add("notifications", {"toUserId": "u3"})

    matches = await store.find_by_field("notifications", "toUserId", "u2")
    assert [doc.id for doc in matches] == [first]
    assert len(await store.list_collection("notifications")) == 2
    assert await store.exists("notifications", first)


@pytest.mark.asyncio
async def test_stale_write_is_rejected(shared_stores):
    first, second = shared_stores
    await first.set("users", "u1", {"following": []})

    row = await first._row("users", "u1")
    await second.array_union("users", "u1", "following", "bob")
    row.data = {"following": ["alice"]}

    with pytest.raises(StaleDataError):
        await first.session.commit()
    await first.session.rollback()
    assert await first.get("users", "u1") == {"following": ["bob"]}


@pytest.mark.asyncio
async def test_concurrent_array_updates_keep_both_values(shared_stores):
    first, second = shared_stores
    await first.set("users", "u1", {"following": ["carol"]})

    results = await asyncio.gather(
        first.array_union("users", "u1", "following", "alice"),
        second.array_union("users", "u1", "following", "bob"),
    )
    assert results == [True, True]

    await asyncio.gather(
        first.array_remove("users", "u1", "following", "carol"),
        second.update("users", "u1", {"bio": "hi"}),
    )
    stored = await first.get("users", "u1")
    assert sorted(stored["following"]) == ["alice", "bob"]
    assert stored["bio"] == "hi"


@pytest.mark.asyncio
async def test_session_dependencies_yield_async_sessions(monkeypatch):
    monkeypatch.setattr(settings, "database_url", "sqlite+aiosqlite://")
    monkeypatch.setattr(settings, "preferences_database_url", None)
    try:
        for dependency in (get_db, get_preferences_db):
            assert get_type_hints(dependency)["return"] == AsyncIterator[AsyncSession]
            async for session in dependency():
                assert isinstance(session, AsyncSession)
    finally:
        await dispose_engines()
