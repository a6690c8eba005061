"""Saavn-backed artist, song and album endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from reliva.services import music_service

router = APIRouter()


@router.get("/saavn")
async def saavn_action(
    action: str | None = None,
    query: str | None = None,
    item_id: str | None = Query(default=None, alias="id"),
    kind: str = Query(default="all", alias="type"),
) -> Any:
    """Combined lookup endpoint selected by ``action``."""
    return await music_service.run_action(action, query=query, item_id=item_id, kind=kind)


@router.post("/saavn")
async def saavn_action_post() -> JSONResponse:
    return JSONResponse(status_code=501, content={"error": "POST operations not supported yet"})


@router.get("/saavn/search")
async def saavn_search(
    q: str | None = None,
    kind: str = Query(default="song", alias="type"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> dict[str, Any]:
    return await music_service.search_catalog(q, kind, page=page, limit=limit)


@router.get("/saavn/artist")
async def saavn_artist(item_id: str | None = Query(default=None, alias="id")) -> dict[str, Any]:
    """Resolve an artist through the primary host, the mirror and the alias table."""
    artist = await music_service.get_artist(item_id)
    return {"success": True, "data": artist.to_wire()}


@router.get("/saavn/artist/similar")
async def saavn_similar_artists(item_id: str | None = Query(default=None, alias="id")) -> dict[str, Any]:
    similar = await music_service.get_similar_artists(item_id)
    return {"success": True, "data": [stub.to_wire() for stub in similar]}


@router.get("/saavn/artist/dob")
async def saavn_artist_dob(item_id: str | None = Query(default=None, alias="id")) -> dict[str, Any]:
    dob = await music_service.get_artist_dob(item_id)
    return {"success": True, "data": dob.to_wire()}


@router.get("/saavn/artist/songs")
async def saavn_artist_songs(item_id: str | None = Query(default=None, alias="id")) -> dict[str, Any]:
    return await music_service.get_artist_songs(item_id)


@router.get("/saavn/artist/albums")
async def saavn_artist_albums(item_id: str | None = Query(default=None, alias="id")) -> dict[str, Any]:
    return await music_service.get_artist_albums(item_id)


@router.get("/saavn/song")
async def saavn_song(item_id: str | None = Query(default=None, alias="id")) -> dict[str, Any]:
    return await music_service.get_song(item_id)


@router.get("/saavn/album/similar")
async def saavn_similar_albums(item_id: str | None = Query(default=None, alias="id")) -> dict[str, Any]:
    """Albums by the same primary artist; failures degrade to an empty list."""
    return await music_service.get_similar_albums(item_id)
