from __future__ import annotations

from typing import Any

from reliva.core.config import settings
from reliva.sources.base import SourceAdapter

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
MUSIC_CATEGORY_ID = "10"


class YouTubeAdapter(SourceAdapter):
    source_name = "youtube"

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key

    @property
    def api_key(self) -> str | None:
        return self._api_key or settings.youtube_api_key

    async def search(self, query: str, *, max_results: int = 3) -> Any:
        return await self._request(
            "search",
            SEARCH_URL,
            params={
                "part": "snippet",
                "q": query,
                "type": "video",
                "videoCategoryId": MUSIC_CATEGORY_ID,
                "maxResults": max_results,
                "key": self._require(self.api_key, "YouTube API key not configured"),
            },
        )
