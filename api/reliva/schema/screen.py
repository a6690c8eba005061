"""Canonical movie and series records built from TMDB payloads."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from reliva.schema.base import CamelModel

POSTER_PLACEHOLDER = "/placeholder.svg?height=300&width=200"


class ScreenTitle(CamelModel):
    """List entry for a movie or a series."""
    id: int | str
    title: str = ""
    year: int = 0
    cover: str = POSTER_PLACEHOLDER
    rating: float = 0
    overview: str = ""
    release_date: str = ""
    first_air_date: str | None = None
    vote_count: int = 0
    genre_ids: list[int] = Field(default_factory=list)
    popularity: float = 0
    media_type: str = "movie"
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None


class PersonResult(CamelModel):
    id: int | str
    name: str = ""
    image: str = POSTER_PLACEHOLDER
    known_for_department: str = ""
    popularity: float = 0
    media_type: str = "person"


class ScreenDetails(CamelModel):
    id: int | str
    title: str = ""
    overview: str = ""
    release_date: str = ""
    last_air_date: str | None = None
    runtime: int | None = None
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    status: str = ""
    tagline: str = ""
    series_type: str | None = None
    genres: list[dict[str, Any]] = Field(default_factory=list)
    production_companies: list[dict[str, Any]] = Field(default_factory=list)
    vote_average: float = 0
    vote_count: int = 0
    popularity: float = 0
    budget: int | None = None
    revenue: int | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    credits: dict[str, Any] = Field(default_factory=dict)
    videos: dict[str, Any] = Field(default_factory=dict)
    images: dict[str, Any] = Field(default_factory=dict)
    similar: list[dict[str, Any]] = Field(default_factory=list)
    recommendations: list[dict[str, Any]] = Field(default_factory=list)
    media_type: str = "movie"
