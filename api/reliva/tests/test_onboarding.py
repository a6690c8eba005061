import pytest

from reliva.schema.users import PreferenceOption
from reliva.services.preference_service import format_preferences

USER = "u" * 28


def test_format_preferences_drops_unknown_categories():
    formatted = format_preferences(
        {
            "movies": [PreferenceOption(id="550", title="Fight Club", genres=["Drama"])],
            "podcasts": [PreferenceOption(title="Ignored")],
        }
    )

    assert formatted == {"movies": {"Fight Club": ["Drama"]}, "series": {}, "songs": {}, "books": {}}


@pytest.mark.asyncio
async def test_save_preferences_records_friends(client, store):
    await store.set("users", USER, {"following": ["f1", "f2"]})

    response = await client.post(
        "/api/onboarding/save-preferences",
        json={
            "firebaseUserId": USER,
            "preferences": {"books": [{"id": "b1", "title": "Dune", "genres": ["Sci-Fi"]}]},
        },
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    saved = await store.get("userPreferences", USER)
    assert saved["books"] == {"Dune": ["Sci-Fi"]}
    assert saved["friends"] == ["f1", "f2"]


@pytest.mark.asyncio
async def test_save_preferences_requires_fields(client):
    response = await client.post("/api/onboarding/save-preferences", json={"firebaseUserId": USER})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


@pytest.mark.asyncio
async def test_update_friends(client, store):
    response = await client.post("/api/onboarding/update-friends", json={"firebaseUserId": USER})
    assert response.status_code == 404
    assert response.json() == {"error": "User preferences not found"}

    await store.set("users", USER, {"following": ["f1"]})
    await store.set("userPreferences", USER, {"movies": {}, "friends": []})

    response = await client.post("/api/onboarding/update-friends", json={"firebaseUserId": USER})
    assert response.json() == {"success": True, "friendsCount": 1}
    assert (await store.get("userPreferences", USER))["friends"] == ["f1"]
