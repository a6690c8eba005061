import pytest

from reliva.core.config import settings
from reliva.services.video_service import FALLBACK_TRAILERS, FALLBACK_VIDEOS, find_video, pick_video

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"


def _first(pool):
    return pool[0]


def test_pick_video_prefers_official_titles():
    items = [
        {"id": {"videoId": "a"}, "snippet": {"title": "Cover version"}},
        {"id": {"videoId": "b"}, "snippet": {"title": "Song (Official Music Video)"}},
    ]
    assert pick_video(items)["id"]["videoId"] == "b"
    assert pick_video(items[:1])["id"]["videoId"] == "a"
    assert pick_video([]) is None


@pytest.mark.asyncio
async def test_missing_key_serves_fallback_from_matching_pool(upstream):
    video = await find_video("Inception trailer", choose=_first)

    assert video == {
        "videoId": FALLBACK_TRAILERS[0]["id"],
        "title": FALLBACK_TRAILERS[0]["title"],
        "thumbnail": "",
        "isFallback": True,
    }
    assert upstream.calls == []

    video = await find_video("Despacito", choose=_first)
    assert video["videoId"] == FALLBACK_VIDEOS[0]["id"]


@pytest.mark.asyncio
async def test_query_variants_are_tried_in_order(upstream, monkeypatch):
    monkeypatch.setattr(settings, "youtube_api_key", "yt-key")
    upstream.add(SEARCH_URL, {"items": []}, params={"q": "Roja official audio"})
    upstream.add(
        SEARCH_URL,
        {
            "items": [
                {
                    "id": {"videoId": "abc123"},
                    "snippet": {"title": "Roja - Official Music Video", "thumbnails": {"medium": {"url": "https://i/m.jpg"}}},
                }
            ]
        },
        params={"q": "Roja official music video"},
    )

    video = await find_video("Roja")

    assert video == {
        "videoId": "abc123",
        "title": "Roja - Official Music Video",
        "thumbnail": "https://i/m.jpg",
        "isFallback": False,
    }
    assert [call.params["q"] for call in upstream.calls] == ["Roja official audio", "Roja official music video"]


@pytest.mark.asyncio
async def test_search_route_requires_query(client, upstream):
    response = await client.get("/api/youtube/search")

    assert response.status_code == 400
    assert response.json() == {"error": "Search query is required"}
