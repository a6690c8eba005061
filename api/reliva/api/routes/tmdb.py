"""TMDB endpoints: proxy, search, details and curated listings."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from reliva.services import screen_service

router = APIRouter()

PROXY_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


@router.get("/search")
async def search(
    q: str | None = None,
    kind: str = Query(default="movie", alias="type"),
    page: int = Query(default=1, ge=1),
) -> dict[str, Any]:
    return await screen_service.search(q, kind, page=page)


@router.get("/details")
async def details(
    item_id: str | None = Query(default=None, alias="id"),
    kind: str = Query(default="movie", alias="type"),
) -> dict[str, Any]:
    return await screen_service.details(item_id, kind)


@router.get("/trending")
async def trending(
    kind: str = Query(default="movie", alias="type"),
    limit: int = Query(default=20, ge=1, le=100),
) -> dict[str, Any]:
    return await screen_service.trending(kind, limit=limit)


@router.get("/popular")
async def popular(
    kind: str = Query(default="movie", alias="type"),
    page: int = Query(default=1, ge=1),
) -> dict[str, Any]:
    return await screen_service.popular(kind, page=page)


@router.get("/discover")
async def discover(
    genre_id: int | None = Query(default=None, alias="genreId"),
    kind: str = Query(default="movie", alias="type"),
    page: int = Query(default=1, ge=1),
) -> dict[str, Any]:
    return await screen_service.discover(genre_id, kind, page=page)


@router.get("/status")
async def status() -> dict[str, Any]:
    return await screen_service.status()


@router.get("/proxy/{path:path}")
async def proxy_get(path: str, request: Request) -> JSONResponse:
    """Forward a GET to TMDB with the server-side API key."""
    data = await screen_service.proxy_get(path, dict(request.query_params))
    return JSONResponse(content=data, headers={"Cache-Control": PROXY_CACHE_CONTROL})


@router.post("/proxy/{path:path}")
async def proxy_post(path: str, request: Request) -> Any:
    body = await request.body()
    return await screen_service.proxy_post(path, body or None)
