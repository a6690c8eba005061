"""Book endpoints backed by Google Books and the NYTimes lists."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from reliva.services import book_service

router = APIRouter()

GOOGLE_CACHE_CONTROL = "public, max-age=3600, s-maxage=3600"
NYTIMES_CACHE_CONTROL = "public, max-age=1800, s-maxage=1800"


@router.get("/books/{book_id:path}")
async def get_book(book_id: str) -> Any:
    """Direct volume lookup, then composite-id search, then a synthesized volume."""
    return await book_service.get_book(book_id)


@router.get("/google-books")
async def google_books(
    q: str | None = None,
    isbn: str | None = None,
    title: str | None = None,
    author: str | None = None,
) -> JSONResponse:
    result = await book_service.search_google_books(q, isbn=isbn, title=title, author=author)
    return JSONResponse(content=result.to_wire(), headers={"Cache-Control": GOOGLE_CACHE_CONTROL})


@router.get("/nytimes/books")
async def nytimes_books(published_date: str = "current") -> JSONResponse:
    overview = await book_service.nytimes_overview(published_date)
    return JSONResponse(content=overview, headers={"Cache-Control": NYTIMES_CACHE_CONTROL})


@router.get("/nytimes/books/lists")
async def nytimes_list(
    list_name: str | None = Query(default=None, alias="list"),
    published_date: str = "current",
) -> JSONResponse:
    books = await book_service.nytimes_list(list_name, published_date)
    return JSONResponse(content=books, headers={"Cache-Control": NYTIMES_CACHE_CONTROL})
