"""User profile, follow and username operations over the document store.

Invariants:
- Follow state lives in two arrays: ``users/<uid>.following`` and ``.followers``.
- A follow notification is best effort and never fails the follow itself.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from reliva.core.errors import ApiError, MissingParameterError
from reliva.schema.users import FollowRequest, PublicProfile
from reliva.services.document_store import DocumentStore

USERS = "users"
PROFILES = "userProfiles"
NOTIFICATIONS = "notifications"

USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
MONGO_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
FIREBASE_UID_RE = re.compile(r"^[a-zA-Z0-9]{28}$")
USERNAME_FORMAT_MESSAGE = (
    "Username must be 3-20 characters long and contain only letters, numbers, and underscores"
)

logger = logging.getLogger("reliva.services.users")


class FollowError(ApiError):
    """Follow/unfollow failure; the body also carries ``success: false``."""

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message, status_code=status_code, success=False)


def identify_id_type(user_id: str | None) -> str:
    """Classify an id as a MongoDB ObjectId, a Firebase uid, or unknown."""
    if not user_id:
        return "unknown"
    if MONGO_ID_RE.match(user_id):
        return "mongodb"
    if FIREBASE_UID_RE.match(user_id):
        return "firebase"
    return "unknown"


async def map_author_id(store: DocumentStore, author_id: str) -> str | None:
    matches = await store.find_by_field(USERS, "authorId", author_id, limit=1)
    return matches[0].id if matches else None


async def get_public_profile(store: DocumentStore, user_id: str) -> PublicProfile:
    uid: str | None = user_id
    if identify_id_type(user_id) == "mongodb":
        uid = await map_author_id(store, user_id)
    data = await store.get(PROFILES, uid) if uid else None
    if data is None:
        return PublicProfile(_id=user_id)
    return PublicProfile(
        _id=user_id,
        username=data.get("username") or data.get("displayName") or "Unknown User",
        displayName=data.get("displayName") or data.get("username") or "Unknown User",
        avatarUrl=data.get("avatarUrl") or None,
        email=data.get("email") or None,
        bio=data.get("bio") or None,
        createdAt=data.get("createdAt") or None,
        updatedAt=data.get("updatedAt") or None,
    )


def _validate_follow(payload: FollowRequest) -> tuple[str, str, str]:
    if not payload.current_user_id or not payload.target_user_id or not payload.action:
        raise FollowError("Missing required parameters")
    if payload.action not in ("follow", "unfollow"):
        raise FollowError("Invalid action. Must be 'follow' or 'unfollow'")
    if payload.current_user_id == payload.target_user_id:
        raise FollowError("Cannot follow yourself")
    return payload.current_user_id, payload.target_user_id, payload.action


def _follow_notification(current_id: str, target_id: str, current: dict[str, Any]) -> dict[str, Any]:
    sender = current.get("fullName") or current.get("displayName")
    return {
        "type": "follow",
        "message": f"{sender or 'Someone'} started following you",
        "fromUserId": current_id,
        "toUserId": target_id,
        "fromUserName": sender or "Unknown User",
        "fromUserAvatar": current.get("avatarUrl") or "",
        "actionUrl": f"/user/{current.get('username') or current_id}",
        "isRead": False,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }


async def apply_follow(store: DocumentStore, payload: FollowRequest) -> dict[str, Any]:
    current_id, target_id, action = _validate_follow(payload)
    current = await store.get(USERS, current_id)
    if current is None:
        raise FollowError("Current user not found", status_code=404)
    target = await store.get(USERS, target_id)
    if target is None:
        raise FollowError("Target user not found", status_code=404)

    following = list(current.get("following") or [])
    followers = list(target.get("followers") or [])

    if action == "follow":
        if target_id in following:
            raise FollowError("Already following this user")
        await store.array_union(USERS, current_id, "following", target_id)
        await store.array_union(USERS, target_id, "followers", current_id)
        try:
            await store.add(NOTIFICATIONS, _follow_notification(current_id, target_id, current))
        except SQLAlchemyError:
            logger.exception("Error creating follow notification for %s", target_id)
            await store.session.rollback()
        return {
            "success": True,
            "message": "Successfully followed user",
            "following": [*following, target_id],
            "followers": [*followers, current_id],
        }

    if target_id not in following:
        raise FollowError("Not following this user")
    await store.array_remove(USERS, current_id, "following", target_id)
    await store.array_remove(USERS, target_id, "followers", current_id)
    return {
        "success": True,
        "message": "Successfully unfollowed user",
        "following": [uid for uid in following if uid != target_id],
        "followers": [uid for uid in followers if uid != current_id],
    }


async def check_username(store: DocumentStore, username: str | None) -> dict[str, Any]:
    """Return ``{available, message}`` for a proposed username."""
    if not username:
        raise ApiError("Username is required", status_code=400, available=False)
    if not USERNAME_RE.match(username):
        return {"available": False, "message": USERNAME_FORMAT_MESSAGE}
    if await store.find_by_field(PROFILES, "username", username, limit=1):
        return {"available": False, "message": "This username is already taken"}
    return {"available": True, "message": "Username is available"}


def _display_name(uid: str, data: dict[str, Any]) -> str:
    email = data.get("email")
    email_name = email.split("@")[0] if isinstance(email, str) and email else None
    return (
        data.get("displayName")
        or data.get("name")
        or data.get("username")
        or email_name
        or f"User {uid[:8]}"
    )


async def recommendations(store: DocumentStore, user_id: str | None, category: str = "movies") -> dict[str, Any]:
    """Group every other user's items in ``category`` into recommendation entries."""
    if not user_id:
        raise MissingParameterError("User ID is required")
    entries: list[dict[str, Any]] = []
    for user in await store.list_collection(USERS):
        if user.id == user_id:
            continue
        items = [{"id": doc.id, **doc.data} for doc in await store.list_collection(f"{USERS}/{user.id}/{category}")]
        if not items:
            continue
        entries.append(
            {
                "user": {
                    "uid": user.id,
                    "displayName": _display_name(user.id, user.data),
                    "photoURL": user.data.get("photoURL") or user.data.get("avatar") or user.data.get("profilePicture"),
                    "email": user.data.get("email"),
                },
                "items": items,
                "itemCount": len(items),
            }
        )
    return {"recommendations": entries, "total": len(entries)}

