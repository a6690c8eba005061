from __future__ import annotations

from typing import Any

from reliva.core.config import settings
from reliva.sources.base import SourceAdapter

API_BASE = "https://api.themoviedb.org/3"
POSTER_BASE = "https://image.tmdb.org/t/p/w300"
IMAGE_BASE = "https://image.tmdb.org/t/p/original"
USER_AGENT = "Reliva-Web-App/1.0"
NOT_CONFIGURED_MESSAGE = "TMDB API key not configured. Please add TMDB_API_KEY to your environment variables."
DETAIL_APPENDS = "credits,videos,images,similar,recommendations"


class TMDBAdapter(SourceAdapter):
    source_name = "tmdb"

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key

    @property
    def api_key(self) -> str | None:
        return self._api_key or settings.tmdb_api_key

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def ensure_configured(self) -> str:
        """Return the API key or raise before any request is made."""
        return self._require(self.api_key, NOT_CONFIGURED_MESSAGE)

    def _auth(self, params: dict[str, Any] | None = None) -> tuple[dict[str, str], dict[str, Any]]:
        api_key = self.ensure_configured()
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        merged = dict(params or {})
        merged.setdefault("api_key", api_key)
        return headers, merged

    async def get(self, path: str, params: dict[str, Any] | None = None, *, operation: str = "get") -> Any:
        """GET ``/3/<path>`` with the API key appended unless the caller supplied one."""
        headers, merged = self._auth(params)
        return await self._request(operation, f"{API_BASE}/{path.lstrip('/')}", headers=headers, params=merged)

    async def post(self, path: str, body: str | bytes | None) -> Any:
        headers, params = self._auth()
        headers["Content-Type"] = "application/json"
        return await self._request(
            "post", f"{API_BASE}/{path.lstrip('/')}", headers=headers, params=params, method="POST", content=body
        )

    async def search(self, kind: str, query: str, *, page: int | str = 1) -> Any:
        return await self.get(
            f"search/{kind}",
            {
                "query": query,
                "language": "en-US",
                "page": page,
                "include_adult": "false",
                "sort_by": "popularity.desc",
            },
            operation=f"search_{kind}",
        )

    async def details(self, kind: str, tmdb_id: str) -> Any:
        return await self.get(f"{kind}/{tmdb_id}", {"append_to_response": DETAIL_APPENDS}, operation=f"{kind}_details")

    async def trending(self, kind: str, *, limit: int = 20) -> Any:
        return await self.get(f"trending/{kind}/week", {"limit": limit}, operation=f"trending_{kind}")

    async def popular(self, kind: str, *, page: int = 1) -> Any:
        return await self.get(f"{kind}/popular", {"page": page, "language": "en-US"}, operation=f"popular_{kind}")

    async def discover(self, kind: str, genre_id: int, *, page: int = 1) -> Any:
        return await self.get(
            f"discover/{kind}",
            {"with_genres": genre_id, "page": page, "sort_by": "popularity.desc", "include_adult": "false"},
            operation=f"discover_{kind}",
        )

    async def configuration(self) -> Any:
        return await self.get("configuration", operation="configuration")
