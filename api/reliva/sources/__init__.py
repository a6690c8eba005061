"""Adapter registry for external content sources."""

from __future__ import annotations

from typing import Dict

from reliva.sources.base import SourceAdapter
from reliva.sources.google_books import GoogleBooksAdapter
from reliva.sources.musicapi import MusicAPIAdapter, TokenCache
from reliva.sources.nytimes import NYTimesBooksAdapter
from reliva.sources.saavn import BROWSER_HEADERS, SaavnAdapter
from reliva.sources.tmdb import TMDBAdapter
from reliva.sources.youtube import YouTubeAdapter

_ADAPTERS: Dict[str, SourceAdapter] = {}


def _build(key: str) -> SourceAdapter:
    if key == "saavn":
        return SaavnAdapter("saavn", setting_name="saavn_primary_base_url")
    if key == "saavn_mirror":
        return SaavnAdapter("saavn_mirror", setting_name="saavn_mirror_base_url")
    if key == "saavn_legacy":
        return SaavnAdapter("saavn_legacy", setting_name="saavn_legacy_base_url", headers=BROWSER_HEADERS)
    if key == "google_books":
        return GoogleBooksAdapter()
    if key == "nytimes":
        return NYTimesBooksAdapter()
    if key == "tmdb":
        return TMDBAdapter()
    if key == "musicapi":
        return MusicAPIAdapter(token_cache=TokenCache())
    if key == "youtube":
        return YouTubeAdapter()
    raise ValueError(f"Unsupported source {key}")


def get_adapter(source: str) -> SourceAdapter:
    """Return a shared adapter instance for the given source name."""
    key = source.lower()
    if key not in _ADAPTERS:
        _ADAPTERS[key] = _build(key)
    return _ADAPTERS[key]


def reset_adapters() -> None:
    """Drop shared adapters (and with them the MusicAPI token cache)."""
    _ADAPTERS.clear()
