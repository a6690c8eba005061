"""JioSaavn adapters: the saavn.dev API, its community mirror and the legacy host."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from reliva.core.config import settings
from reliva.sources.base import SourceAdapter

JSON_HEADERS = {"Content-Type": "application/json"}
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
}
SEARCH_KINDS = {"all", "songs", "albums", "artists", "playlists"}


class SaavnAdapter(SourceAdapter):
    """Saavn-compatible API rooted at ``base_url``.

    The primary host and the mirror share a route layout; the legacy host
    answers query-string style lookups only.
    """

    def __init__(
        self,
        source_name: str,
        base_url: str | None = None,
        *,
        setting_name: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.source_name = source_name
        self._base_url = base_url
        self._setting_name = setting_name
        self.headers = dict(headers or JSON_HEADERS)

    @property
    def base_url(self) -> str:
        if self._base_url:
            return self._base_url.rstrip("/")
        return str(getattr(settings, self._setting_name or "saavn_primary_base_url")).rstrip("/")

    def _url(self, *parts: str) -> str:
        path = "/".join(quote(part, safe="") for part in parts)
        return f"{self.base_url}/{path}"

    async def get_artist(self, artist_id: str) -> Any:
        return await self._request("artist", self._url("artists"), headers=self.headers, params={"id": artist_id})

    async def get_artist_songs(self, artist_id: str) -> Any:
        return await self._request("artist_songs", self._url("artists", artist_id, "songs"), headers=self.headers)

    async def get_artist_albums(self, artist_id: str, *, in_path: bool = True) -> Any:
        if in_path:
            url = self._url("artists", artist_id, "albums")
            return await self._request("artist_albums", url, headers=self.headers)
        url = self._url("artists", "albums")
        return await self._request("artist_albums", url, headers=self.headers, params={"id": artist_id})

    async def get_song(self, song_id: str, *, in_path: bool = False) -> Any:
        if in_path:
            return await self._request("song", self._url("songs", song_id), headers=self.headers)
        return await self._request("song", self._url("songs"), headers=self.headers, params={"id": song_id})

    async def get_album(self, album_id: str, *, in_path: bool = False) -> Any:
        if in_path:
            return await self._request("album", self._url("albums", album_id), headers=self.headers)
        return await self._request("album", self._url("albums"), headers=self.headers, params={"id": album_id})

    async def search(
        self, kind: str, query: str, *, page: int | str | None = None, limit: int | str | None = None
    ) -> Any:
        params: dict[str, Any] = {"query": query}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return await self._request(f"search_{kind}", self._url("search", kind), headers=self.headers, params=params)

    async def get_modules(
        self, language: str = "english", *, page: int | None = None, limit: int | str | None = None
    ) -> Any:
        params: dict[str, Any] = {"language": language}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return await self._request("modules", self._url("modules"), headers=self.headers, params=params)

    async def get_lyrics(self, song_id: str) -> Any:
        return await self._request("lyrics", self._url("lyrics"), headers=self.headers, params={"id": song_id})

    async def get_playlist(self, playlist_id: str) -> Any:
        return await self._request(
            "playlist", self._url("playlists"), headers=self.headers, params={"id": playlist_id}
        )


def unwrap_data(payload: Any) -> Any:
    """Return ``payload["data"]`` for Saavn envelopes, or None."""
    if isinstance(payload, dict):
        return payload.get("data")
    return None


def unwrap_results(payload: Any) -> list[Any]:
    """Return search/module results from either envelope shape Saavn hosts use."""
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        return data["results"]
    if isinstance(payload.get("results"), list):
        return payload["results"]
    if isinstance(data, list):
        return data
    return []
