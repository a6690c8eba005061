"""TMDB payload normalization for movies, series and people."""

from __future__ import annotations

import math
from typing import Any

from reliva.schema.screen import POSTER_PLACEHOLDER, PersonResult, ScreenDetails, ScreenTitle
from reliva.sources.tmdb import IMAGE_BASE, POSTER_BASE
from reliva.utils.datetime import year_prefix


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def poster_url(path: Any) -> str:
    return f"{POSTER_BASE}{path}" if _text(path) else POSTER_PLACEHOLDER


def original_image_url(path: Any) -> str | None:
    return f"{IMAGE_BASE}{path}" if _text(path) else None


def normalize_movie(raw: Any) -> ScreenTitle:
    data = _dict(raw)
    released = _text(data.get("release_date"))
    return ScreenTitle(
        id=data.get("id") or "",
        title=_text(data.get("title")),
        year=year_prefix(released, 0),
        cover=poster_url(data.get("poster_path")),
        rating=_number(data.get("vote_average")),
        overview=_text(data.get("overview")),
        release_date=released,
        vote_count=int(_number(data.get("vote_count"))),
        genre_ids=[genre for genre in _list(data.get("genre_ids")) if isinstance(genre, int)],
        popularity=_number(data.get("popularity")),
        media_type="movie",
    )


def normalize_series(raw: Any) -> ScreenTitle:
    data = _dict(raw)
    first_aired = _text(data.get("first_air_date"))
    return ScreenTitle(
        id=data.get("id") or "",
        title=_text(data.get("name")),
        year=year_prefix(first_aired, 0),
        cover=poster_url(data.get("poster_path")),
        rating=_number(data.get("vote_average")),
        overview=_text(data.get("overview")),
        release_date=first_aired,
        first_air_date=first_aired,
        vote_count=int(_number(data.get("vote_count"))),
        genre_ids=[genre for genre in _list(data.get("genre_ids")) if isinstance(genre, int)],
        popularity=_number(data.get("popularity")),
        media_type="tv",
        number_of_seasons=int(_number(data.get("number_of_seasons"))) or 1,
        number_of_episodes=int(_number(data.get("number_of_episodes"))) or 1,
    )


def normalize_person(raw: Any) -> PersonResult:
    data = _dict(raw)
    return PersonResult(
        id=data.get("id") or "",
        name=_text(data.get("name")),
        image=poster_url(data.get("profile_path")),
        known_for_department=_text(data.get("known_for_department")),
        popularity=_number(data.get("popularity")),
    )


def normalize_results(kind: str, payload: Any) -> list[ScreenTitle] | list[PersonResult]:
    """Map a TMDB ``results`` page using the mapper for ``kind`` (movie, tv, person)."""
    results = [entry for entry in _list(_dict(payload).get("results")) if isinstance(entry, dict)]
    if kind == "person":
        return [normalize_person(entry) for entry in results]
    if kind == "tv":
        return [normalize_series(entry) for entry in results]
    return [normalize_movie(entry) for entry in results]


def normalize_details(kind: str, raw: Any) -> ScreenDetails:
    data = _dict(raw)
    is_series = kind == "tv"
    common: dict[str, Any] = {
        "id": data.get("id") or "",
        "overview": _text(data.get("overview")),
        "status": _text(data.get("status")),
        "genres": _list(data.get("genres")),
        "production_companies": _list(data.get("production_companies")),
        "vote_average": _number(data.get("vote_average")),
        "vote_count": int(_number(data.get("vote_count"))),
        "popularity": _number(data.get("popularity")),
        "poster_path": original_image_url(data.get("poster_path")),
        "backdrop_path": original_image_url(data.get("backdrop_path")),
        "credits": _dict(data.get("credits")),
        "videos": _dict(data.get("videos")),
        "images": _dict(data.get("images")),
        "similar": _list(_dict(data.get("similar")).get("results")),
        "recommendations": _list(_dict(data.get("recommendations")).get("results")),
    }
    if is_series:
        return ScreenDetails(
            **common,
            title=_text(data.get("name")),
            release_date=_text(data.get("first_air_date")),
            last_air_date=_text(data.get("last_air_date")),
            number_of_seasons=int(_number(data.get("number_of_seasons"))),
            number_of_episodes=int(_number(data.get("number_of_episodes"))),
            series_type=_text(data.get("type")),
            media_type="tv",
        )
    return ScreenDetails(
        **common,
        title=_text(data.get("title")),
        release_date=_text(data.get("release_date")),
        runtime=int(_number(data.get("runtime"))),
        tagline=_text(data.get("tagline")),
        budget=int(_number(data.get("budget"))),
        revenue=int(_number(data.get("revenue"))),
        media_type="movie",
    )
