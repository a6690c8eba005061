"""Book lookups across Google Books and the NYTimes best-seller lists.

Invariants:
- A direct Google Books hit is returned untouched.
- Composite ids decode to JSON objects; anything else is an invalid id.
- When nothing matches a decoded id, the volume is synthesized locally.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import unquote

from reliva.core.errors import InvalidIdentifierError, MissingParameterError, UpstreamUnavailableError
from reliva.normalizers.books import (
    normalize_google_search,
    normalize_nyt_named_list,
    normalize_nyt_overview,
    synthesize_volume,
)
from reliva.schema.books import BookSearchResult
from reliva.sources import get_adapter
from reliva.sources.http import UpstreamError

logger = logging.getLogger("reliva.services.books")


def decode_book_id(raw_id: str) -> dict[str, Any]:
    """Decode a URL-encoded JSON book id into its fields."""
    try:
        decoded = json.loads(unquote(raw_id))
    except ValueError as exc:
        raise InvalidIdentifierError("Invalid book ID format") from exc
    if not isinstance(decoded, dict):
        raise InvalidIdentifierError("Invalid book ID format")
    return decoded


async def get_book(raw_id: str) -> dict[str, Any]:
    """Resolve a book id to a Google-Books-shaped volume."""
    books = get_adapter("google_books")
    try:
        return await books.get_volume(raw_id)
    except UpstreamError as exc:
        logger.info("Direct volume lookup failed for %s: %s", raw_id, exc)

    fields = decode_book_id(raw_id)
    query = f"{fields.get('title')} {fields.get('author')}"
    try:
        payload = await books.search(query, max_results=1)
    except UpstreamError as exc:
        logger.info("Title/author search failed for %s: %s", raw_id, exc)
        payload = None
    items = payload.get("items") if isinstance(payload, dict) else None
    if isinstance(items, list) and items:
        return items[0]
    return synthesize_volume(raw_id, fields).to_wire()


def build_google_query(
    q: str | None = None,
    *,
    isbn: str | None = None,
    title: str | None = None,
    author: str | None = None,
) -> str:
    if isbn:
        return f"isbn:{isbn}"
    if title and author:
        return f'intitle:"{title}" inauthor:"{author}"'
    if title:
        return f'intitle:"{title}"'
    if author:
        return f'inauthor:"{author}"'
    if q:
        return q
    raise MissingParameterError("Query parameter 'q', 'isbn', 'title', or 'author' is required")


async def search_google_books(
    q: str | None = None,
    *,
    isbn: str | None = None,
    title: str | None = None,
    author: str | None = None,
) -> BookSearchResult:
    query = build_google_query(q, isbn=isbn, title=title, author=author)
    try:
        payload = await get_adapter("google_books").search(query, max_results=5)
    except UpstreamError as exc:
        raise UpstreamUnavailableError(
            "Failed to fetch books data from Google Books API", details=str(exc)
        ) from exc
    return normalize_google_search(payload)


async def nytimes_overview(published_date: str | None = "current") -> dict[str, Any]:
    try:
        payload = await get_adapter("nytimes").overview(published_date)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch books data from NYTimes API", details=str(exc)) from exc
    return normalize_nyt_overview(payload)


async def nytimes_list(list_name: str | None, published_date: str | None = "current") -> dict[str, Any]:
    if not list_name:
        raise MissingParameterError("List name parameter is required. Use 'list' query parameter.")
    try:
        payload = await get_adapter("nytimes").get_list(list_name, published_date)
    except UpstreamError as exc:
        raise UpstreamUnavailableError("Failed to fetch list data from NYTimes API", details=str(exc)) from exc
    return normalize_nyt_named_list(payload, list_name)
