"""Music resolution over the Saavn hosts and MusicAPI.

Invariants:
- Artist lookup tries the primary host, then the mirror, then an alias search.
- Similar-artist lookups never fail; the seed catalogue backs known ids.
- Every track, album and artist leaves through the music normalizers.
"""

from __future__ import annotations

import logging
from typing import Any

from reliva.core.errors import (
    MissingParameterError,
    NotFoundError,
    UpstreamUnavailableError,
)
from reliva.normalizers.music import (
    artist_dob,
    artist_hit,
    artists_from_songs,
    normalize_album,
    normalize_artist,
    normalize_artist_stub,
    normalize_track,
    normalize_tracks,
    summarize_album,
)
from reliva.schema.music import Artist, ArtistDob, ArtistStub
from reliva.services import catalog_seed
from reliva.services.resolver import Attempt, resolve_first
from reliva.sources import get_adapter
from reliva.sources.http import UpstreamError
from reliva.sources.saavn import SEARCH_KINDS, unwrap_data, unwrap_results

SIMILAR_ALBUM_LIMIT = 12
TRENDING_LIMIT = 12
COMBINED_ACTIONS = ("search", "song", "album", "artist", "lyrics", "trending", "playlist")
SEARCH_TYPES = {"song": "songs", "album": "albums", "artist": "artists"}

logger = logging.getLogger("reliva.services.music")


def _has_name(record: Any) -> bool:
    return isinstance(record, dict) and bool(str(record.get("name") or "").strip())


def _envelope(payload: Any, data: Any) -> dict[str, Any]:
    success = payload.get("success", True) if isinstance(payload, dict) else True
    return {"success": success, "data": data}


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


async def _artist_record(source: str, artist_id: str) -> Any:
    return unwrap_data(await get_adapter(source).get_artist(artist_id))


async def _alias_hit(name: str) -> Any:
    results = unwrap_results(await get_adapter("saavn").search("artists", name))
    return results[0] if results else None


def _artist_attempts(artist_id: str) -> list[Attempt[Any]]:
    attempts: list[Attempt[Any]] = [
        Attempt("saavn", lambda: _artist_record("saavn", artist_id)),
        Attempt("saavn_mirror", lambda: _artist_record("saavn_mirror", artist_id)),
    ]
    alias = catalog_seed.alias_name(artist_id)
    if alias:
        attempts.append(Attempt("saavn_alias_search", lambda: _alias_hit(alias)))
    return attempts


def _seeded_stubs(artist_id: str) -> list[ArtistStub]:
    return [normalize_artist_stub(entry) for entry in catalog_seed.seeded_similar_artists(artist_id)]


async def get_artist(artist_id: str | None) -> Artist:
    """Resolve an artist record through the source chain."""
    if not artist_id:
        raise MissingParameterError("Artist ID is required")
    resolution = await resolve_first(artist_id, _artist_attempts(artist_id), _has_name)
    if resolution is None:
        alias = catalog_seed.alias_name(artist_id)
        if not alias:
            raise NotFoundError("Artist not found")
        # Every live source failed for a catalogued id: build the record from the seed tables.
        logger.warning("Serving catalogued artist %s from seed data", artist_id)
        return Artist(id=artist_id, name=alias, similar_artists=_seeded_stubs(artist_id))
    artist = normalize_artist(resolution.value)
    if not artist.id:
        artist.id = artist_id
    if not artist.similar_artists:
        artist.similar_artists = _seeded_stubs(artist_id)
    logger.debug("Artist %s resolved from %s", artist_id, resolution.source)
    return artist


async def get_similar_artists(artist_id: str | None) -> list[ArtistStub]:
    if not artist_id:
        raise MissingParameterError("Artist ID is required")
    try:
        artist = await get_artist(artist_id)
    except NotFoundError:
        return []
    return artist.similar_artists


async def get_artist_dob(artist_id: str | None) -> ArtistDob:
    if not artist_id:
        raise MissingParameterError("Artist ID is required")
    try:
        payload = await get_adapter("saavn").get_artist(artist_id)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch artist DOB") from exc
    return artist_dob(unwrap_data(payload))


async def get_artist_songs(artist_id: str | None) -> dict[str, Any]:
    if not artist_id:
        raise MissingParameterError("Artist ID is required")
    try:
        payload = await get_adapter("saavn").get_artist_songs(artist_id)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch artist songs") from exc
    data = _as_dict(unwrap_data(payload))
    songs = [track.to_wire() for track in normalize_tracks(data.get("songs"))]
    return _envelope(payload, {**data, "songs": songs})


async def get_artist_albums(artist_id: str | None) -> dict[str, Any]:
    if not artist_id:
        raise MissingParameterError("Artist ID is required")
    try:
        payload = await get_adapter("saavn").get_artist_albums(artist_id)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch artist albums") from exc
    data = _as_dict(unwrap_data(payload))
    albums = [normalize_album(album).to_wire() for album in data.get("albums") or [] if isinstance(album, dict)]
    return _envelope(payload, {**data, "albums": albums})


async def get_song(song_id: str | None, *, source: str = "saavn") -> dict[str, Any]:
    """Song detail from the primary host (``songs?id=``) or the mirror (``songs/<id>``)."""
    if not song_id:
        raise MissingParameterError("Song ID is required")
    try:
        payload = await get_adapter(source).get_song(song_id, in_path=source == "saavn_mirror")
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch song details") from exc
    data = unwrap_data(payload)
    if isinstance(data, dict):
        data = [data]
    return _envelope(payload, [track.to_wire() for track in normalize_tracks(data)])


async def get_album(album_id: str | None) -> dict[str, Any]:
    if not album_id:
        raise MissingParameterError("Album ID is required")
    try:
        payload = await get_adapter("saavn_mirror").get_album(album_id, in_path=True)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch album details") from exc
    return _envelope(payload, normalize_album(unwrap_data(payload)).to_wire())


def _results_envelope(payload: Any, results: list[Any]) -> dict[str, Any]:
    data = _as_dict(unwrap_data(payload))
    return _envelope(payload, {**data, "results": results})


async def search_songs(query: str | None, *, page: int = 1, limit: int = 40) -> dict[str, Any]:
    if not query:
        raise MissingParameterError("Query parameter is required")
    try:
        payload = await get_adapter("saavn_mirror").search("songs", query, page=page, limit=limit)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch music data") from exc
    return _results_envelope(payload, [normalize_track(song).to_wire() for song in unwrap_results(payload)])


async def search_albums(query: str | None, *, page: int = 1, limit: int = 20) -> dict[str, Any]:
    if not query:
        raise MissingParameterError("Query parameter is required")
    try:
        payload = await get_adapter("saavn_mirror").search("albums", query, page=page, limit=limit)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch albums") from exc
    return _results_envelope(payload, [normalize_album(album).to_wire() for album in unwrap_results(payload)])


async def search_catalog(query: str | None, kind: str = "song", *, page: int = 1, limit: int = 10) -> dict[str, Any]:
    """Typed mirror search; artist searches fall back to grouping song hits by artist."""
    if not query:
        raise MissingParameterError("Query parameter is required")
    mirror = get_adapter("saavn_mirror")
    endpoint = SEARCH_TYPES.get(kind, "songs")
    try:
        payload = await mirror.search(endpoint, query, page=page, limit=limit)
        results = unwrap_results(payload)
        if kind != "artist":
            normalizer = normalize_album if kind == "album" else normalize_track
            return {"data": {"results": [normalizer(entry).to_wire() for entry in results]}}
        if results and _has_name(results[0]):
            return {"data": {"results": [artist_hit(entry).to_wire() for entry in results]}}
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch music data", details=str(exc)) from exc
    logger.info("Artist search for %r returned nothing usable; grouping song hits", query)
    try:
        song_payload = await mirror.search("songs", query, page=page, limit=limit)
    except UpstreamError as exc:
        logger.warning("Song search fallback for %r failed: %s", query, exc)
        return {"data": {"results": []}}
    hits = artists_from_songs(unwrap_results(song_payload), limit)
    return {"data": {"results": [hit.to_wire() for hit in hits]}}


async def get_trending(limit: int = TRENDING_LIMIT) -> dict[str, Any]:
    try:
        payload = await get_adapter("saavn_mirror").get_modules("english", page=1, limit=limit)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch trending songs", details=str(exc)) from exc
    return {"data": {"results": [normalize_track(song).to_wire() for song in unwrap_results(payload)]}}


def _no_albums(message: str) -> dict[str, Any]:
    return {"data": {"albums": [], "message": message}}


async def get_similar_albums(album_id: str | None) -> dict[str, Any]:
    """Other albums by the album's first primary artist, current album excluded."""
    if not album_id:
        raise MissingParameterError(
            "Album ID is required",
            message="Please provide a valid album ID in the query parameters",
        )
    legacy = get_adapter("saavn_legacy")
    try:
        album = _as_dict(unwrap_data(await legacy.get_album(album_id)))
        primary = _as_dict(album.get("artists")).get("primary")
        lead = _as_dict(primary[0]) if isinstance(primary, list) and primary else {}
        if not lead.get("id"):
            return _no_albums("No artist information found for this album")
        artist_albums = _as_dict(unwrap_data(await legacy.get_artist_albums(str(lead["id"]), in_path=False)))
    except UpstreamError as exc:
        logger.warning("Similar albums lookup failed for %s: %s", album_id, exc)
        return _no_albums("Failed to fetch similar albums")
    candidates = [
        entry for entry in artist_albums.get("albums") or [] if isinstance(entry, dict) and entry.get("id") != album_id
    ]
    albums = [summarize_album(entry).to_wire() for entry in candidates[:SIMILAR_ALBUM_LIMIT]]
    return {"data": {"albums": albums, "total": len(albums), "artist": lead.get("name")}}


async def run_action(action: str | None, *, query: str | None, item_id: str | None, kind: str = "all") -> Any:
    """Dispatch one ``/saavn?action=`` request to the primary host, returning its payload."""
    if action not in COMBINED_ACTIONS:
        raise MissingParameterError("Invalid action parameter")
    if action == "search" and not query:
        raise MissingParameterError("Query parameter is required for search")
    if action not in ("search", "trending") and not item_id:
        label = "lyrics" if action == "lyrics" else f"{action} details"
        raise MissingParameterError(f"ID parameter is required for {label}")

    saavn = get_adapter("saavn")
    try:
        if action == "search":
            return await saavn.search(kind if kind in SEARCH_KINDS else "all", query)
        if action == "song":
            songs = unwrap_data(await saavn.get_song(item_id))
            return songs[0] if isinstance(songs, list) and songs else None
        if action == "album":
            return unwrap_data(await saavn.get_album(item_id))
        if action == "artist":
            return unwrap_data(await saavn.get_artist(item_id))
        if action == "lyrics":
            return unwrap_data(await saavn.get_lyrics(item_id))
        if action == "playlist":
            return unwrap_data(await saavn.get_playlist(item_id))
        return unwrap_data(await saavn.get_modules("english"))
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch data from Saavn API") from exc


async def get_track_preview(track_id: str | None) -> Any:
    if not track_id:
        raise MissingParameterError("Track ID is required")
    try:
        return await get_adapter("musicapi").track_preview(track_id)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to get track preview") from exc


async def search_musicapi(query: str | None, *, kind: str = "track", limit: int = 10) -> Any:
    if not query:
        raise MissingParameterError("Query parameter is required")
    try:
        return await get_adapter("musicapi").search(query, kind=kind, limit=limit)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to search music") from exc
