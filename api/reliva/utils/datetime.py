"""Lenient date parsing for provider payloads.

Providers disagree on date formats: TMDB and Google Books send ISO prefixes
("1999", "1999-10", "1999-10-15"), Saavn birthdays arrive in whatever form the
catalogue editor typed.
"""

from __future__ import annotations

from datetime import date, datetime

_ISO_PADDING = {4: "-01-01", 7: "-01", 10: ""}
_LOOSE_FORMATS = (
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
)


def parse_date(value: str | None) -> date | None:
    """ISO year, year-month or full date; anything else is None."""
    if not value or len(value) not in _ISO_PADDING:
        return None
    try:
        return date.fromisoformat(value + _ISO_PADDING[len(value)])
    except ValueError:
        return None


def parse_loose_date(value: object) -> date | None:
    """ISO forms first, then common day/month/year spellings, then an ISO timestamp."""
    if not isinstance(value, str) or not value.strip():
        return None
    candidate = value.strip()
    parsed = parse_date(candidate)
    if parsed is not None:
        return parsed
    for fmt in _LOOSE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(candidate.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def year_prefix(value: object, default: int) -> int:
    """Integer before the first '-' of a date-like string, else ``default``."""
    if not isinstance(value, str):
        return default
    head = value.split("-", 1)[0].strip()
    return int(head) if head.isdecimal() and head.isascii() else default
