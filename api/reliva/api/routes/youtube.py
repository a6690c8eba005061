from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from reliva.services import video_service

router = APIRouter()


@router.get("/search")
async def search(q: str | None = None) -> dict[str, Any]:
    """Best-matching video for a query, or a static fallback."""
    video = await video_service.find_video(q)
    return {"success": True, "data": video}
