from typing import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from reliva.db.session import get_preferences_session, get_session
from reliva.services.document_store import DocumentStore


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


async def get_preferences_db() -> AsyncIterator[AsyncSession]:
    async for session in get_preferences_session():
        yield session


async def get_user_store(session: AsyncSession = Depends(get_db)) -> DocumentStore:
    return DocumentStore(session)


async def get_preference_store(session: AsyncSession = Depends(get_preferences_db)) -> DocumentStore:
    return DocumentStore(session)
