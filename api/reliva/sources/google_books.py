"""Google Books adapter for volume lookups and searches."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from reliva.core.config import settings
from reliva.sources.base import SourceAdapter

VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksAdapter(SourceAdapter):
    """Google Books API; the key is optional and only raises quota."""
    source_name = "google_books"

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key

    @property
    def api_key(self) -> str | None:
        return self._api_key or settings.google_books_api_key

    def _params(self, **params: Any) -> dict[str, Any] | None:
        if self.api_key:
            params["key"] = self.api_key
        return params or None

    async def get_volume(self, volume_id: str) -> Any:
        """Fetch one volume by Google Books id."""
        return await self._request(
            "volume",
            f"{VOLUMES_URL}/{quote(volume_id, safe='')}",
            params=self._params(),
        )

    async def search(self, query: str, *, max_results: int = 5) -> Any:
        """Run a volumes query (supports ``isbn:``, ``intitle:`` and ``inauthor:``)."""
        return await self._request(
            "search",
            VOLUMES_URL,
            headers={"Accept": "application/json"},
            params=self._params(q=query, maxResults=max_results),
        )
