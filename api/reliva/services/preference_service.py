"""Onboarding preferences kept in the ``userPreferences`` collection."""

from __future__ import annotations

import logging
from typing import Any

from reliva.core.errors import MissingParameterError, NotFoundError
from reliva.schema.users import PreferenceOption
from reliva.services.document_store import DocumentStore

PREFERENCES = "userPreferences"
CATEGORIES = ("movies", "series", "songs", "books")

logger = logging.getLogger("reliva.services.preferences")


async def _friends(users: DocumentStore, user_id: str) -> list[str]:
    data = await users.get("users", user_id)
    if not data:
        return []
    return [str(uid) for uid in data.get("following") or []]


def format_preferences(selections: dict[str, list[PreferenceOption]]) -> dict[str, dict[str, list[str]]]:
    """Map each known category to ``{title: genres}``; unknown categories are dropped."""
    formatted: dict[str, dict[str, list[str]]] = {category: {} for category in CATEGORIES}
    for category, options in selections.items():
        if category not in formatted:
            continue
        for option in options:
            formatted[category][option.title] = list(option.genres)
    return formatted


async def save_preferences(
    users: DocumentStore,
    preferences: DocumentStore,
    user_id: str | None,
    selections: dict[str, list[PreferenceOption]] | None,
) -> dict[str, Any]:
    if not user_id or not selections:
        raise MissingParameterError("Missing required fields")
    document: dict[str, Any] = {**format_preferences(selections), "friends": await _friends(users, user_id)}
    await preferences.set(PREFERENCES, user_id, document, merge=True)
    logger.info("Saved preferences for %s", user_id)
    return {"success": True}


async def refresh_friends(users: DocumentStore, preferences: DocumentStore, user_id: str | None) -> dict[str, Any]:
    if not user_id:
        raise MissingParameterError("Firebase User ID required")
    friends = await _friends(users, user_id)
    if not await preferences.update(PREFERENCES, user_id, {"friends": friends}):
        raise NotFoundError("User preferences not found")
    return {"success": True, "friendsCount": len(friends)}
