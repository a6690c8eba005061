"""Google Books and NYTimes payload normalization."""

from __future__ import annotations

import math
from typing import Any

from reliva.schema.books import (
    PLACEHOLDER_COVER,
    Book,
    BookSearchResult,
    ImageLinks,
    Volume,
    VolumeInfo,
)
from reliva.utils.datetime import year_prefix

DEFAULT_BOOK_YEAR = 2024
DEFAULT_LIST_NAME = "Best Seller"


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


def book_year(value: Any) -> int:
    """Year before the first '-' of a date-like string, defaulting to 2024."""
    return year_prefix(value, DEFAULT_BOOK_YEAR)


def _identifier(volume_info: dict[str, Any], kind: str) -> str:
    for entry in _list(volume_info.get("industryIdentifiers")):
        entry = _dict(entry)
        if entry.get("type") == kind:
            return _text(entry.get("identifier"))
    return ""


def normalize_google_book(item: Any) -> Book:
    data = _dict(item)
    info = _dict(data.get("volumeInfo"))
    sale = _dict(data.get("saleInfo"))
    price = _dict(sale.get("listPrice"))
    images = _dict(info.get("imageLinks"))
    authors = [author for author in _list(info.get("authors")) if isinstance(author, str)]
    description = _text(info.get("description"))
    published = _text(info.get("publishedDate"))
    return Book(
        id=_text(data.get("id")),
        title=_text(info.get("title")),
        authors=authors,
        author=authors[0] if authors else "",
        publisher=_text(info.get("publisher")),
        published_date=published,
        description=description,
        overview=description,
        page_count=int(_number(info.get("pageCount"))),
        categories=[category for category in _list(info.get("categories")) if isinstance(category, str)],
        average_rating=_number(info.get("averageRating")),
        ratings_count=int(_number(info.get("ratingsCount"))),
        language=_text(info.get("language")) or "en",
        isbn10=_identifier(info, "ISBN_10"),
        isbn13=_identifier(info, "ISBN_13"),
        cover=_text(images.get("thumbnail")) or _text(images.get("smallThumbnail")) or PLACEHOLDER_COVER,
        preview_link=_text(info.get("previewLink")),
        info_link=_text(info.get("infoLink")),
        buy_link=_text(sale.get("buyLink")),
        price=_number(price.get("amount")),
        currency=_text(price.get("currencyCode")) or "USD",
        is_ebook=bool(sale.get("isEbook")),
        year=book_year(published),
    )


def normalize_google_search(payload: Any) -> BookSearchResult:
    data = _dict(payload)
    return BookSearchResult(
        total_items=int(_number(data.get("totalItems"))),
        items=[normalize_google_book(item) for item in _list(data.get("items")) if isinstance(item, dict)],
    )


def nyt_book_id(book: dict[str, Any], list_id: Any) -> str:
    """ISBN-13 of the first isbn entry, then its ISBN-10, then ``nyt-<rank>-<list id>``."""
    isbns = _list(book.get("isbns"))
    first = _dict(isbns[0]) if isbns else {}
    isbn = _text(first.get("isbn13")) or _text(first.get("isbn10"))
    if isbn:
        return isbn
    return f"nyt-{book.get('rank')}-{list_id}"


def normalize_nyt_book(book: Any, list_id: Any, list_name: Any) -> dict[str, Any]:
    """Keep every NYTimes field and add the computed book fields."""
    data = _dict(book)
    created = _text(data.get("created_date"))
    return {
        **data,
        "id": nyt_book_id(data, list_id),
        "year": book_year(created),
        "cover": _text(data.get("book_image")) or PLACEHOLDER_COVER,
        "overview": _text(data.get("description")),
        "publishedDate": created,
        "pageCount": data.get("weeks_on_list") or 0,
        "listName": _text(list_name) or DEFAULT_LIST_NAME,
    }


def normalize_nyt_list(entry: Any) -> dict[str, Any]:
    data = _dict(entry)
    return {
        **data,
        "books": [
            normalize_nyt_book(book, data.get("list_id"), data.get("list_name"))
            for book in _list(data.get("books"))
        ],
    }


def normalize_nyt_overview(payload: Any) -> dict[str, Any]:
    data = _dict(payload)
    results = _dict(data.get("results"))
    return {
        "status": data.get("status"),
        "copyright": data.get("copyright"),
        "num_results": data.get("num_results"),
        "last_modified": data.get("last_modified"),
        "results": {
            **results,
            "lists": [normalize_nyt_list(entry) for entry in _list(results.get("lists"))],
        },
    }


def normalize_nyt_named_list(payload: Any, requested_name: str) -> dict[str, Any]:
    """Normalize a single ``lists/<name>.json`` response."""
    data = _dict(payload)
    results = _dict(data.get("results"))
    list_name = _text(results.get("list_name")) or requested_name
    return {
        "status": data.get("status"),
        "copyright": data.get("copyright"),
        "num_results": data.get("num_results"),
        "last_modified": data.get("last_modified"),
        "results": {
            **results,
            "books": [
                normalize_nyt_book(book, results.get("list_id"), list_name)
                for book in _list(results.get("books"))
            ],
        },
    }


def synthesize_volume(raw_id: str, fields: dict[str, Any]) -> Volume:
    """Build a Google-Books-shaped volume from decoded id fields alone."""
    cover = _text(fields.get("cover")) or PLACEHOLDER_COVER
    page_count = fields.get("pageCount")
    return Volume(
        id=raw_id,
        volume_info=VolumeInfo(
            title=_text(fields.get("title")) or "Unknown Title",
            authors=[_text(fields.get("author")) or "Unknown Author"],
            description=_text(fields.get("overview")) or "No description available",
            image_links=ImageLinks(thumbnail=cover, small_thumbnail=cover),
            published_date=_text(fields.get("publishedDate")),
            page_count=page_count if isinstance(page_count, int) and not isinstance(page_count, bool) else 0,
        ),
    )
