"""Canonical music records produced by the normalizers."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from reliva.schema.base import CamelModel


class MediaLink(CamelModel):
    """Quality-tagged link used for both artwork and audio streams."""
    quality: str = ""
    link: str = ""


class ArtistStub(CamelModel):
    id: str = ""
    name: str = ""
    role: str = ""
    image: list[MediaLink] = Field(default_factory=list)
    type: str = "artist"
    url: str = ""


class ArtistCredits(CamelModel):
    primary: list[ArtistStub] = Field(default_factory=list)
    featured: list[ArtistStub] = Field(default_factory=list)
    all: list[ArtistStub] = Field(default_factory=list)


class AlbumRef(CamelModel):
    id: str = ""
    name: str = "Unknown Album"
    url: str = ""


class Track(CamelModel):
    id: str = ""
    name: str = ""
    album: AlbumRef = Field(default_factory=AlbumRef)
    primary_artists: str = "Unknown Artist"
    artists: ArtistCredits = Field(default_factory=ArtistCredits)
    duration: int = 0
    year: str = "Unknown"
    language: str = "Unknown"
    play_count: int = 0
    has_lyrics: bool = False
    explicit_content: bool = False
    url: str = ""
    download_url: list[MediaLink] = Field(default_factory=list)
    image: list[MediaLink] = Field(default_factory=list)


class Album(CamelModel):
    id: str = ""
    name: str = ""
    year: str = "Unknown"
    song_count: int = 0
    language: str = "Unknown"
    play_count: int = 0
    primary_artists: str = "Unknown Artist"
    artists: ArtistCredits = Field(default_factory=ArtistCredits)
    image: list[MediaLink] = Field(default_factory=list)
    url: str = ""
    songs: list[Track] = Field(default_factory=list)


class Artist(CamelModel):
    id: str = ""
    name: str = ""
    url: str = ""
    image: list[MediaLink] = Field(default_factory=list)
    follower_count: int = 0
    fan_count: int = 0
    is_verified: bool = False
    bio: Any = None
    dominant_language: str = "Unknown"
    dominant_type: str = "artist"
    dob: str | None = None
    dob_is_valid: bool = False
    artists: ArtistCredits = Field(default_factory=ArtistCredits)
    similar_artists: list[ArtistStub] = Field(default_factory=list)
    top_songs: list[Track] = Field(default_factory=list)
    top_albums: list[Album] = Field(default_factory=list)


class ArtistDob(CamelModel):
    id: str | None = None
    name: str | None = None
    dob: str | None = None
    is_valid: bool = False


class AlbumSummary(CamelModel):
    """Album entry in a similar-albums list."""
    id: str = ""
    name: str = ""
    year: str = "Unknown"
    language: str = "Unknown"
    image: list[MediaLink] = Field(default_factory=list)
    artists: ArtistCredits = Field(default_factory=ArtistCredits)
    song_count: int = 0
    play_count: int = 0
    url: str = ""


class ArtistHit(CamelModel):
    """Artist-shaped search result, possibly synthesized from song hits."""
    id: str
    name: str
    primary_artists: str
    image: list[MediaLink] = Field(default_factory=list)
    type: str = "artist"
