"""Request and response payloads for the social endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from reliva.schema.base import CamelModel


class FollowRequest(CamelModel):
    current_user_id: str | None = None
    target_user_id: str | None = None
    action: str | None = None


class UsernameRequest(BaseModel):
    username: str | None = None


class PreferenceOption(BaseModel):
    """One onboarding choice: a titled item and its genres."""
    id: str | None = None
    title: str
    genres: list[str] = Field(default_factory=list)


class SavePreferencesRequest(CamelModel):
    firebase_user_id: str | None = None
    preferences: dict[str, list[PreferenceOption]] | None = None


class UpdateFriendsRequest(CamelModel):
    firebase_user_id: str | None = None


class PublicProfile(BaseModel):
    """Profile shape returned for any user id, with "Unknown User" defaults."""
    id: str = Field(alias="_id")
    username: str = "Unknown User"
    display_name: str = Field(default="Unknown User", alias="displayName")
    avatar_url: str | None = Field(default=None, alias="avatarUrl")
    email: str | None = None
    bio: str | None = None
    created_at: Any = Field(default=None, alias="createdAt")
    updated_at: Any = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)
