"""NYTimes Books API adapter for best-seller lists."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from reliva.core.config import settings
from reliva.sources.base import SourceAdapter

LISTS_URL = "https://api.nytimes.com/svc/books/v3/lists"
NOT_CONFIGURED_MESSAGE = (
    "NYTimes API key not configured. Please add NYTIMES_API_KEY to your environment variables."
)


class NYTimesBooksAdapter(SourceAdapter):
    source_name = "nytimes"

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key

    @property
    def api_key(self) -> str | None:
        return self._api_key or settings.nytimes_api_key

    def _params(self, published_date: str | None) -> dict[str, Any]:
        params: dict[str, Any] = {"api-key": self._require(self.api_key, NOT_CONFIGURED_MESSAGE)}
        if published_date and published_date != "current":
            params["published_date"] = published_date
        return params

    async def overview(self, published_date: str | None = None) -> Any:
        """Fetch every list for a publication date ("current" when omitted)."""
        params = self._params(published_date)
        return await self._request(
            "overview", f"{LISTS_URL}/overview.json", headers={"Accept": "application/json"}, params=params
        )

    async def get_list(self, list_name: str, published_date: str | None = None) -> Any:
        """Fetch a single named list."""
        params = self._params(published_date)
        return await self._request(
            "list",
            f"{LISTS_URL}/{quote(list_name, safe='')}.json",
            headers={"Accept": "application/json"},
            params=params,
        )
