"""Canonical book records and Google-Books-shaped volumes."""

from __future__ import annotations

from pydantic import Field

from reliva.schema.base import CamelModel

PLACEHOLDER_COVER = "/placeholder.svg"


class Book(CamelModel):
    """Book as returned by the Google Books search endpoint."""
    id: str
    title: str = ""
    authors: list[str] = Field(default_factory=list)
    author: str = ""
    publisher: str = ""
    published_date: str = ""
    description: str = ""
    overview: str = ""
    page_count: int = 0
    categories: list[str] = Field(default_factory=list)
    average_rating: float = 0
    ratings_count: int = 0
    language: str = "en"
    isbn10: str = ""
    isbn13: str = ""
    cover: str = PLACEHOLDER_COVER
    preview_link: str = ""
    info_link: str = ""
    buy_link: str = ""
    price: float = 0
    currency: str = "USD"
    is_ebook: bool = False
    year: int = 2024


class BookSearchResult(CamelModel):
    total_items: int = 0
    items: list[Book] = Field(default_factory=list)


class ImageLinks(CamelModel):
    thumbnail: str = PLACEHOLDER_COVER
    small_thumbnail: str = PLACEHOLDER_COVER


class VolumeInfo(CamelModel):
    title: str = "Unknown Title"
    authors: list[str] = Field(default_factory=lambda: ["Unknown Author"])
    description: str = "No description available"
    image_links: ImageLinks = Field(default_factory=ImageLinks)
    published_date: str = ""
    page_count: int = 0
    categories: list[str] = Field(default_factory=list)
    average_rating: float = 0
    ratings_count: int = 0
    publisher: str = "Unknown"
    language: str = "en"
    preview_link: str = ""
    info_link: str = ""


class Volume(CamelModel):
    """Synthesized stand-in for a Google Books volume."""
    id: str
    volume_info: VolumeInfo = Field(default_factory=VolumeInfo)


