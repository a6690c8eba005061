"""Collection/document access over the ``documents`` table.

The store mirrors the small slice of Firestore and MongoDB semantics the
social endpoints rely on: keyed get/set, merge updates, generated ids,
equality lookups on a top-level field and array union/remove.

Read-modify-write operations go through ``_mutate``: the row is re-read
under ``SELECT ... FOR UPDATE`` where the backend supports it, and the
``version`` column guards the commit everywhere else. A commit that loses
to a concurrent writer is retried against the fresh data.
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from reliva.models.document import Document

WRITE_ATTEMPTS = 5


@dataclass(slots=True)
class StoredDocument:
    id: str
    data: dict[str, Any]


class DocumentStore:
    """Thin async facade over one SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _row(self, collection: str, doc_id: str, *, for_update: bool = False) -> Document | None:
        statement = select(Document).where(Document.collection == collection, Document.doc_id == doc_id)
        if for_update:
            statement = statement.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def _mutate(
        self, collection: str, doc_id: str, change: Callable[[dict[str, Any]], dict[str, Any]]
    ) -> bool:
        """Replace a document's data with ``change(current)``. False when it does not exist."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(WRITE_ATTEMPTS),
            retry=retry_if_exception_type(StaleDataError),
            reraise=True,
        ):
            with attempt:
                row = await self._row(collection, doc_id, for_update=True)
                if row is None:
                    await self.session.rollback()
                    return False
                row.data = change(copy.deepcopy(row.data or {}))
                try:
                    await self.session.commit()
                except StaleDataError:
                    await self.session.rollback()
                    raise
        return True

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return a copy of the document data, or None when absent."""
        row = await self._row(collection, doc_id)
        if row is None:
            return None
        return copy.deepcopy(row.data or {})

    async def exists(self, collection: str, doc_id: str) -> bool:
        return await self._row(collection, doc_id) is not None

    async def set(self, collection: str, doc_id: str, data: dict[str, Any], *, merge: bool = False) -> None:
        """Create or replace a document; ``merge`` keeps unspecified fields."""

        def _apply(current: dict[str, Any]) -> dict[str, Any]:
            return {**current, **copy.deepcopy(data)} if merge else copy.deepcopy(data)

        if await self._mutate(collection, doc_id, _apply):
            return
        self.session.add(Document(collection=collection, doc_id=doc_id, data=copy.deepcopy(data)))
        try:
            await self.session.commit()
        except IntegrityError:
            # Another writer created it first; write over that row instead.
            await self.session.rollback()
            await self._mutate(collection, doc_id, _apply)

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool:
        """Merge fields into an existing document. Returns False if it does not exist."""
        return await self._mutate(collection, doc_id, lambda current: {**current, **copy.deepcopy(fields)})

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Insert a document under a generated id and return that id."""
        doc_id = uuid.uuid4().hex
        self.session.add(Document(collection=collection, doc_id=doc_id, data=copy.deepcopy(data)))
        await self.session.commit()
        return doc_id

    async def list_collection(self, collection: str) -> list[StoredDocument]:
        result = await self.session.execute(
            select(Document).where(Document.collection == collection).order_by(Document.id)
        )
        return [StoredDocument(id=row.doc_id, data=copy.deepcopy(row.data or {})) for row in result.scalars()]

    async def find_by_field(
        self, collection: str, field: str, value: Any, *, limit: int | None = None
    ) -> list[StoredDocument]:
        """Return documents whose top-level ``field`` equals ``value``."""
        matches = [doc for doc in await self.list_collection(collection) if doc.data.get(field) == value]
        if limit is not None:
            return matches[:limit]
        return matches

    async def array_union(self, collection: str, doc_id: str, field: str, value: Any) -> bool:
        """Append ``value`` to an array field unless it is already present."""

        def _apply(current: dict[str, Any]) -> dict[str, Any]:
            items = list(current.get(field) or [])
            if value not in items:
                items.append(value)
            current[field] = items
            return current

        return await self._mutate(collection, doc_id, _apply)

    async def array_remove(self, collection: str, doc_id: str, field: str, value: Any) -> bool:
        """Remove every occurrence of ``value`` from an array field."""

        def _apply(current: dict[str, Any]) -> dict[str, Any]:
            current[field] = [item for item in (current.get(field) or []) if item != value]
            return current

        return await self._mutate(collection, doc_id, _apply)
