"""Social endpoints: profiles, follows, usernames and recommendations."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from reliva.api.deps import get_user_store
from reliva.schema.users import FollowRequest, UsernameRequest
from reliva.services import user_service
from reliva.services.document_store import DocumentStore

router = APIRouter()


@router.post("/users/follow")
async def follow_user(
    payload: FollowRequest,
    store: DocumentStore = Depends(get_user_store),
) -> dict[str, Any]:
    """Follow or unfollow another user."""
    return await user_service.apply_follow(store, payload)


@router.get("/users/{user_id}")
async def get_user(user_id: str, store: DocumentStore = Depends(get_user_store)) -> dict[str, Any]:
    """Public profile for a Firebase uid or a MongoDB author id."""
    profile = await user_service.get_public_profile(store, user_id)
    return {"success": True, "user": profile.model_dump(by_alias=True)}


@router.post("/validate-username")
async def validate_username(
    payload: UsernameRequest,
    store: DocumentStore = Depends(get_user_store),
) -> dict[str, Any]:
    return await user_service.check_username(store, payload.username)


@router.get("/recommendations")
async def recommendations(
    user_id: str | None = Query(default=None, alias="userId"),
    category: str = "movies",
    store: DocumentStore = Depends(get_user_store),
) -> dict[str, Any]:
    return await user_service.recommendations(store, user_id, category)
