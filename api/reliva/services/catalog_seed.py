"""Hand-maintained catalogue entries used when live sources come back empty.

These tables are hand-authored seed data, not a snapshot of any live
catalogue. Lookups return them unchanged; links are left blank rather than
guessed.
"""

from __future__ import annotations

import copy
from typing import Any

KNOWN_ARTIST_ALIASES: dict[str, str] = {
    "456269": "A. R. Rahman",
    "ar-rahman": "A. R. Rahman",
    "arrahman": "A. R. Rahman",
}

KNOWN_SIMILAR_ARTISTS: dict[str, list[dict[str, Any]]] = {
    "456269": [
        {
            "id": "455240",
            "name": "Ilaiyaraaja",
            "role": "music",
            "image": [],
            "type": "artist",
            "url": "",
        },
        {
            "id": "455663",
            "name": "Anirudh Ravichander",
            "role": "music",
            "image": [],
            "type": "artist",
            "url": "",
        },
        {
            "id": "455170",
            "name": "Harris Jayaraj",
            "role": "music",
            "image": [],
            "type": "artist",
            "url": "",
        },
        {
            "id": "455306",
            "name": "Yuvan Shankar Raja",
            "role": "music",
            "image": [],
            "type": "artist",
            "url": "",
        },
    ],
}


def alias_name(artist_id: str) -> str | None:
    return KNOWN_ARTIST_ALIASES.get(artist_id) or KNOWN_ARTIST_ALIASES.get(artist_id.lower())


def seeded_similar_artists(artist_id: str) -> list[dict[str, Any]]:
    return copy.deepcopy(KNOWN_SIMILAR_ARTISTS.get(artist_id, []))
