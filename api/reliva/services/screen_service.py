"""Movie and series lookups against TMDB."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from reliva.core.errors import ApiError, MissingParameterError, NotFoundError, UpstreamUnavailableError
from reliva.normalizers.media import normalize_details, normalize_results
from reliva.schema.screen import PersonResult, ScreenTitle
from reliva.sources import get_adapter
from reliva.sources.http import UpstreamError

SCREEN_KINDS = ("movie", "tv")
SEARCH_KINDS = ("movie", "person", "tv")
INVALID_TYPE_MESSAGE = "Invalid type parameter. Use 'movie' or 'tv'"

logger = logging.getLogger("reliva.services.screen")

MOCK_MOVIES = [
    ScreenTitle(
        id="550",
        title="Fight Club",
        year=1999,
        cover="https://image.tmdb.org/t/p/w300/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
        rating=8.8,
        overview=(
            "A ticking-time-bomb insomniac and a slippery soap salesman channel primal male "
            "aggression into a shocking new form of therapy."
        ),
        release_date="1999-10-15",
        vote_count=25000,
        genre_ids=[18],
    ),
    ScreenTitle(
        id="13",
        title="Forrest Gump",
        year=1994,
        cover="https://image.tmdb.org/t/p/w300/saHP97rTPS5eLmrLQEcANmKrsFl.jpg",
        rating=8.8,
        overview=(
            "A man with a low IQ has accomplished great things in his life and been present "
            "during significant historic events."
        ),
        release_date="1994-07-06",
        vote_count=24000,
        genre_ids=[35, 18],
    ),
]

MOCK_PEOPLE = [
    PersonResult(
        id="976",
        name="Jason Statham",
        image="https://image.tmdb.org/t/p/w300/whNwkEQYWLFJA8ij0WyOOAD5xhQ.jpg",
        known_for_department="Acting",
        popularity=15.5,
    ),
]


def _require_kind(kind: str) -> str:
    if kind not in SCREEN_KINDS:
        raise MissingParameterError(INVALID_TYPE_MESSAGE)
    return kind


def _wire(records: list[Any]) -> list[dict[str, Any]]:
    return [record.to_wire() for record in records]


async def proxy_get(path: str, params: dict[str, Any]) -> Any:
    """Forward a GET to TMDB, relaying the upstream status on failure."""
    try:
        return await get_adapter("tmdb").get(path, params, operation="proxy_get")
    except UpstreamError as exc:
        if exc.status_code:
            raise ApiError(f"TMDB API error: {exc.status_code}", status_code=exc.status_code) from exc
        raise UpstreamUnavailableError("Failed to fetch TMDB data") from exc


async def proxy_post(path: str, body: bytes | None) -> Any:
    try:
        return await get_adapter("tmdb").post(path, body)
    except UpstreamError as exc:
        if exc.status_code:
            raise ApiError(f"TMDB API error: {exc.status_code}", status_code=exc.status_code) from exc
        raise UpstreamUnavailableError("Failed to post to TMDB") from exc


async def search(query: str | None, kind: str = "movie", *, page: int = 1) -> dict[str, Any]:
    """Search titles or people; upstream failures fall back to canned results."""
    if not query:
        raise MissingParameterError("Query parameter 'q' is required")
    kind = kind if kind in SEARCH_KINDS else "movie"
    tmdb = get_adapter("tmdb")
    # Missing credentials are reported, not masked by the canned results.
    tmdb.ensure_configured()
    try:
        payload = await tmdb.search(kind, query, page=page)
    except UpstreamError as exc:
        logger.warning("TMDB %s search failed, serving canned results: %s", kind, exc)
        mocks = MOCK_MOVIES if kind == "movie" else MOCK_PEOPLE
        return {
            "results": _wire(mocks),
            "total_results": len(mocks),
            "total_pages": 1,
            "fallback": True,
            "error": str(exc) or "Failed to search TMDB",
        }
    data = payload if isinstance(payload, dict) else {}
    return {
        "results": _wire(normalize_results(kind, data)),
        "total_results": data.get("total_results") or 0,
        "total_pages": data.get("total_pages") or 0,
    }


async def details(tmdb_id: str | None, kind: str = "movie") -> dict[str, Any]:
    if not tmdb_id:
        raise MissingParameterError("ID parameter is required")
    _require_kind(kind)
    try:
        payload = await get_adapter("tmdb").details(kind, tmdb_id)
    except UpstreamError as exc:
        if exc.status_code == 404:
            raise NotFoundError("Content not found") from exc
        raise UpstreamUnavailableError("Failed to fetch content details", details=str(exc)) from exc
    if not payload:
        raise NotFoundError("Content not found")
    return {"details": normalize_details(kind, payload).to_wire(), "type": kind}


async def trending(kind: str = "movie", *, limit: int = 20) -> dict[str, Any]:
    _require_kind(kind)
    try:
        payload = await get_adapter("tmdb").trending(kind, limit=limit)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch trending content", details=str(exc)) from exc
    results = _wire(normalize_results(kind, payload))
    return {"results": results, "total_results": len(results), "type": kind, "limit": limit}


async def popular(kind: str = "movie", *, page: int = 1) -> dict[str, Any]:
    _require_kind(kind)
    try:
        payload = await get_adapter("tmdb").popular(kind, page=page)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch popular content", details=str(exc)) from exc
    results = _wire(normalize_results(kind, payload))
    return {"results": results, "total_results": len(results), "page": page, "type": kind}


async def discover(genre_id: int | None, kind: str = "movie", *, page: int = 1) -> dict[str, Any]:
    if genre_id is None:
        raise MissingParameterError("genreId parameter is required")
    _require_kind(kind)
    try:
        payload = await get_adapter("tmdb").discover(kind, genre_id, page=page)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to discover content", details=str(exc)) from exc
    results = _wire(normalize_results(kind, payload))
    return {"results": results, "total_results": len(results), "page": page, "genre_id": str(genre_id), "type": kind}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def status() -> dict[str, Any]:
    """Report whether TMDB is configured and reachable. Never raises."""
    tmdb = get_adapter("tmdb")
    if not tmdb.configured:
        return {
            "status": "error",
            "message": "TMDB API key not configured",
            "configured": False,
            "timestamp": _timestamp(),
        }
    try:
        config = await tmdb.configuration()
    except UpstreamError as exc:
        return {
            "status": "error",
            "message": f"TMDB API connection failed: {exc.status_code or 'network error'}",
            "configured": True,
            "api_status": exc.status_code,
            "timestamp": _timestamp(),
        }
    images = config.get("images") if isinstance(config, dict) else None
    images = images if isinstance(images, dict) else {}
    return {
        "status": "success",
        "message": "TMDB API is working correctly",
        "configured": True,
        "base_url": images.get("base_url") or "Not available",
        "secure_base_url": images.get("secure_base_url") or "Not available",
        "poster_sizes": images.get("poster_sizes") or [],
        "backdrop_sizes": images.get("backdrop_sizes") or [],
        "profile_sizes": images.get("profile_sizes") or [],
        "timestamp": _timestamp(),
    }
