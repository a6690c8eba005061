"""YouTube video lookup with static fallbacks."""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Sequence

from reliva.core.errors import MissingParameterError, NotConfiguredError
from reliva.sources import get_adapter
from reliva.sources.http import UpstreamError

PREFERRED_TITLE_MARKERS = ("official audio", "official music video")

FALLBACK_VIDEOS = (
    {"id": "9bZkp7q19f0", "title": "PSY - GANGNAM STYLE", "artist": "PSY"},
    {"id": "kJQP7kiw5Fk", "title": "Luis Fonsi - Despacito", "artist": "Luis Fonsi"},
    {"id": "dQw4w9WgXcQ", "title": "Rick Astley - Never Gonna Give You Up", "artist": "Rick Astley"},
    {"id": "ZZ5LpwO-An4", "title": "Ed Sheeran - Shape of You", "artist": "Ed Sheeran"},
    {"id": "YykjpeuMNEk", "title": "Clean Bandit - Rockabye", "artist": "Clean Bandit"},
)

FALLBACK_TRAILERS = (
    {"id": "uYPbbksJxIg", "title": "Parasite Official Trailer", "type": "movie"},
    {"id": "6aJ-cW1HlB8", "title": "Inception Official Trailer", "type": "movie"},
    {"id": "YoHD9XEInc0", "title": "Interstellar Official Trailer", "type": "movie"},
    {"id": "EXeTwQWrcwY", "title": "The Dark Knight Official Trailer", "type": "movie"},
    {"id": "hA2hKAuBZqU", "title": "Breaking Bad Official Trailer", "type": "series"},
)

Chooser = Callable[[Sequence[dict[str, str]]], dict[str, str]]

logger = logging.getLogger("reliva.services.video")


def query_variants(query: str) -> list[str]:
    return [f"{query} official audio", f"{query} official music video", f"{query} audio", query]


def pick_video(items: list[Any]) -> dict[str, Any] | None:
    """First item titled as official audio or video, else the first item."""
    videos = [item for item in items if isinstance(item, dict)]
    if not videos:
        return None
    for video in videos:
        title = str((video.get("snippet") or {}).get("title") or "").lower()
        if any(marker in title for marker in PREFERRED_TITLE_MARKERS):
            return video
    return videos[0]


def fallback_video(query: str, choose: Chooser = random.choice) -> dict[str, Any]:
    pool = FALLBACK_TRAILERS if "trailer" in query.lower() else FALLBACK_VIDEOS
    entry = choose(pool)
    return {"videoId": entry["id"], "title": entry["title"], "thumbnail": "", "isFallback": True}


async def find_video(query: str | None, *, choose: Chooser = random.choice) -> dict[str, Any]:
    if not query:
        raise MissingParameterError("Search query is required")
    youtube = get_adapter("youtube")
    for variant in query_variants(query):
        try:
            payload = await youtube.search(variant, max_results=3)
        except NotConfiguredError:
            logger.info("YouTube API key not configured; serving a fallback video")
            break
        except UpstreamError as exc:
            logger.info("YouTube search failed for %r: %s", variant, exc)
            continue
        items = payload.get("items") if isinstance(payload, dict) else None
        best = pick_video(items if isinstance(items, list) else [])
        if best is None:
            continue
        snippet = best.get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        return {
            "videoId": (best.get("id") or {}).get("videoId"),
            "title": snippet.get("title"),
            "thumbnail": (thumbnails.get("medium") or {}).get("url") or "",
            "isFallback": False,
        }
    return fallback_video(query, choose)
