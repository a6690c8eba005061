"""Saavn payload normalization for tracks, albums and artists.

Invariants:
- ``artists.primary`` is always a list; a flat artist string becomes one entry.
- Missing scalars fall back to the defaults declared on the schema models.
"""

from __future__ import annotations

import math
import re
from typing import Any

from reliva.schema.music import (
    Album,
    AlbumRef,
    AlbumSummary,
    Artist,
    ArtistCredits,
    ArtistDob,
    ArtistHit,
    ArtistStub,
    MediaLink,
    Track,
)
from reliva.utils.datetime import parse_loose_date

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"
_WHITESPACE_RE = re.compile(r"\s+")


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _int(value: Any, default: int = 0) -> int:
    """Whole number from an int, a finite float or a numeric string."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return default


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return bool(value)


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def media_links(value: Any) -> list[MediaLink]:
    """Accept a bare URL, or a list of ``{quality, link|url}`` entries."""
    if isinstance(value, str):
        return [MediaLink(link=value)] if value else []
    if not isinstance(value, list):
        return []
    links: list[MediaLink] = []
    for entry in value:
        if isinstance(entry, str) and entry:
            links.append(MediaLink(link=entry))
        elif isinstance(entry, dict):
            link = _text(entry.get("link") or entry.get("url"))
            if link:
                links.append(MediaLink(quality=_text(entry.get("quality")), link=link))
    return links


def resolve_artist_name(song: dict[str, Any]) -> str:
    """Return the first usable artist name for a song-like payload."""
    artists = song.get("artists")
    primary = artists.get("primary") if isinstance(artists, dict) else None
    first_primary = primary[0] if isinstance(primary, list) and primary else None
    candidates = (
        song.get("primaryArtists"),
        song.get("artist"),
        _dict(first_primary).get("name"),
        _dict(artists).get("name"),
        song.get("featuredArtists"),
        song.get("singer"),
        song.get("composer"),
    )
    for candidate in candidates:
        name = _text(candidate)
        if name and name != UNKNOWN_ARTIST:
            return name
    return UNKNOWN_ARTIST


def normalize_artist_stub(raw: Any) -> ArtistStub:
    data = _dict(raw)
    return ArtistStub(
        id=_text(data.get("id")),
        name=_text(data.get("name") or data.get("title")),
        role=_text(data.get("role")),
        image=media_links(data.get("image")),
        type=_text(data.get("type")) or "artist",
        url=_text(data.get("url") or data.get("perma_url")),
    )


def _stubs(value: Any) -> list[ArtistStub]:
    if not isinstance(value, list):
        return []
    return [normalize_artist_stub(entry) for entry in value if isinstance(entry, dict)]


def artist_credits(raw: dict[str, Any], resolved_name: str) -> ArtistCredits:
    """Keep the source's artist lists, or synthesize one entry from a flat name."""
    artists = raw.get("artists")
    if isinstance(artists, dict) and isinstance(artists.get("primary"), list):
        return ArtistCredits(
            primary=_stubs(artists.get("primary")),
            featured=_stubs(artists.get("featured")),
            all=_stubs(artists.get("all")),
        )
    if resolved_name and resolved_name != UNKNOWN_ARTIST:
        return ArtistCredits(primary=[ArtistStub(id="", name=resolved_name)])
    return ArtistCredits()


def _album_ref(raw: dict[str, Any]) -> AlbumRef:
    album = raw.get("album")
    if isinstance(album, dict):
        return AlbumRef(
            id=_text(album.get("id")),
            name=_text(album.get("name")) or UNKNOWN_ALBUM,
            url=_text(album.get("url")),
        )
    name = _text(album) or _text(raw.get("albumName"))
    return AlbumRef(name=name or UNKNOWN_ALBUM)


def normalize_track(raw: Any) -> Track:
    data = _dict(raw)
    artist_name = resolve_artist_name(data)
    return Track(
        id=_text(data.get("id")),
        name=_text(data.get("name") or data.get("title") or data.get("song")),
        album=_album_ref(data),
        primary_artists=artist_name,
        artists=artist_credits(data, artist_name),
        duration=_int(data.get("duration")),
        year=_text(data.get("year")) or "Unknown",
        language=_text(data.get("language")) or "Unknown",
        play_count=_int(data.get("playCount") or data.get("play_count")),
        has_lyrics=_flag(data.get("hasLyrics")),
        explicit_content=_flag(data.get("explicitContent")),
        url=_text(data.get("url") or data.get("perma_url")),
        download_url=media_links(data.get("downloadUrl")),
        image=media_links(data.get("image")),
    )


def normalize_tracks(value: Any) -> list[Track]:
    if not isinstance(value, list):
        return []
    return [normalize_track(entry) for entry in value if isinstance(entry, dict)]


def normalize_album(raw: Any) -> Album:
    data = _dict(raw)
    artist_name = resolve_artist_name(data)
    return Album(
        id=_text(data.get("id")),
        name=_text(data.get("name") or data.get("title")),
        year=_text(data.get("year")) or "Unknown",
        song_count=_int(data.get("songCount")),
        language=_text(data.get("language")) or "Unknown",
        play_count=_int(data.get("playCount")),
        primary_artists=artist_name,
        artists=artist_credits(data, artist_name),
        image=media_links(data.get("image")),
        url=_text(data.get("url") or data.get("perma_url")),
        songs=normalize_tracks(data.get("songs")),
    )


def summarize_album(raw: Any) -> AlbumSummary:
    data = _dict(raw)
    artist_name = resolve_artist_name(data)
    return AlbumSummary(
        id=_text(data.get("id")),
        name=_text(data.get("name") or data.get("title")),
        year=_text(data.get("year")) or "Unknown",
        language=_text(data.get("language")) or "Unknown",
        image=media_links(data.get("image")),
        artists=artist_credits(data, artist_name),
        song_count=_int(data.get("songCount")),
        play_count=_int(data.get("playCount")),
        url=_text(data.get("url")),
    )


def dob_is_valid(value: Any) -> bool:
    return parse_loose_date(value) is not None


def normalize_artist(raw: Any) -> Artist:
    data = _dict(raw)
    artist_id = _text(data.get("id"))
    name = _text(data.get("name"))
    images = media_links(data.get("image"))
    dob = _text(data.get("dob")) or None
    own_stub = [ArtistStub(id=artist_id, name=name, image=images)] if name else []
    top_albums = data.get("topAlbums")
    return Artist(
        id=artist_id,
        name=name,
        url=_text(data.get("url") or data.get("perma_url")),
        image=images,
        follower_count=_int(data.get("followerCount") or data.get("follower_count")),
        fan_count=_int(data.get("fanCount")),
        is_verified=_flag(data.get("isVerified")),
        dominant_language=_text(data.get("dominantLanguage")) or "Unknown",
        dominant_type=_text(data.get("dominantType")) or "artist",
        bio=data.get("bio"),
        dob=dob,
        dob_is_valid=dob_is_valid(dob),
        artists=ArtistCredits(primary=own_stub),
        similar_artists=_stubs(data.get("similarArtists")),
        top_songs=normalize_tracks(data.get("topSongs")),
        top_albums=[normalize_album(entry) for entry in top_albums or [] if isinstance(entry, dict)],
    )


def artist_dob(raw: Any) -> ArtistDob:
    data = _dict(raw)
    dob = data.get("dob")
    return ArtistDob(
        id=_text(data.get("id")) or None,
        name=_text(data.get("name")) or None,
        dob=_text(dob) or None,
        is_valid=dob_is_valid(dob),
    )


def synthetic_artist_id(name: str) -> str:
    return f"artist_{_WHITESPACE_RE.sub('_', name).lower()}"


def artist_hit(raw: Any) -> ArtistHit:
    """Map an artist search result to the artist hit shape."""
    data = _dict(raw)
    name = _text(data.get("name") or data.get("title"))
    return ArtistHit(
        id=_text(data.get("id")) or synthetic_artist_id(name),
        name=name,
        primary_artists=name,
        image=media_links(data.get("image")),
    )


def artists_from_songs(songs: list[Any], limit: int) -> list[ArtistHit]:
    """Group song hits by their ``primaryArtists`` string, first hit per name."""
    hits: dict[str, ArtistHit] = {}
    for song in songs:
        name = _text(_dict(song).get("primaryArtists"))
        if not name or name in hits:
            continue
        hits[name] = ArtistHit(
            id=synthetic_artist_id(name),
            name=name,
            primary_artists=name,
            image=media_links(song.get("image")),
        )
    return list(hits.values())[: max(limit, 0)]
