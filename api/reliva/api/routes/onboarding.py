"""Onboarding preference endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from reliva.api.deps import get_preference_store, get_user_store
from reliva.schema.users import SavePreferencesRequest, UpdateFriendsRequest
from reliva.services import preference_service
from reliva.services.document_store import DocumentStore

router = APIRouter()


@router.post("/save-preferences")
async def save_preferences(
    payload: SavePreferencesRequest,
    users: DocumentStore = Depends(get_user_store),
    preferences: DocumentStore = Depends(get_preference_store),
) -> dict[str, Any]:
    return await preference_service.save_preferences(
        users, preferences, payload.firebase_user_id, payload.preferences
    )


@router.post("/update-friends")
async def update_friends(
    payload: UpdateFriendsRequest,
    users: DocumentStore = Depends(get_user_store),
    preferences: DocumentStore = Depends(get_preference_store),
) -> dict[str, Any]:
    return await preference_service.refresh_friends(users, preferences, payload.firebase_user_id)
