"""Mirror-backed music search, trending and MusicAPI endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from reliva.services import music_service

router = APIRouter()


@router.get("/search")
async def search_songs(
    q: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=40, ge=1, le=100),
) -> dict[str, Any]:
    return await music_service.search_songs(q, page=page, limit=limit)


@router.get("/albums")
async def search_albums(
    q: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> dict[str, Any]:
    return await music_service.search_albums(q, page=page, limit=limit)


@router.get("/albums/{album_id}")
async def get_album(album_id: str) -> dict[str, Any]:
    return await music_service.get_album(album_id)


@router.get("/song/{song_id}")
async def get_song(song_id: str) -> dict[str, Any]:
    return await music_service.get_song(song_id, source="saavn_mirror")


@router.get("/trending")
async def trending(limit: int = Query(default=music_service.TRENDING_LIMIT, ge=1, le=100)) -> dict[str, Any]:
    return await music_service.get_trending(limit)


@router.get("/music-preview")
async def music_preview(track_id: str | None = Query(default=None, alias="trackId")) -> Any:
    """Spotify preview metadata via MusicAPI, authenticated with the cached token."""
    return await music_service.get_track_preview(track_id)


@router.get("/music-api")
async def music_api_search(
    query: str | None = None,
    kind: str = Query(default="track", alias="type"),
    limit: int = Query(default=10, ge=1, le=50),
) -> Any:
    return await music_service.search_musicapi(query, kind=kind, limit=limit)
