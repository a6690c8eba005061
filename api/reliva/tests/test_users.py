import pytest

from reliva.services.user_service import identify_id_type

ALICE = "a" * 28
BOB = "b" * 28


def test_identify_id_type():
    assert identify_id_type("507f1f77bcf86cd799439011") == "mongodb"
    assert identify_id_type("Xk3mP9qR2sT5vW8yZ1aB4cD6eF7g") == "firebase"
    assert identify_id_type("short") == "unknown"
    assert identify_id_type(None) == "unknown"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("username", "available"),
    [("ab", False), ("valid_user1", True), ("bad name!", False), ("x" * 21, False)],
)
async def test_username_format(client, username, available):
    response = await client.post("/api/validate-username", json={"username": username})

    assert response.status_code == 200
    assert response.json()["available"] is available


@pytest.mark.asyncio
async def test_username_taken_and_missing(client, store):
    await store.set("userProfiles", ALICE, {"username": "taken_name"})

    response = await client.post("/api/validate-username", json={"username": "taken_name"})
    assert response.json() == {"available": False, "message": "This username is already taken"}

    response = await client.post("/api/validate-username", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Username is required", "available": False}


async def _seed_pair(store):
    await store.set("users", ALICE, {"fullName": "Alice", "username": "alice", "following": []})
    await store.set("users", BOB, {"displayName": "Bob", "followers": []})


@pytest.mark.asyncio
async def test_follow_updates_both_sides_and_notifies(client, store):
    await _seed_pair(store)

    response = await client.post(
        "/api/users/follow",
        json={"currentUserId": ALICE, "targetUserId": BOB, "action": "follow"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["following"] == [BOB]
    assert body["followers"] == [ALICE]
    assert (await store.get("users", ALICE))["following"] == [BOB]
    assert (await store.get("users", BOB))["followers"] == [ALICE]

    notifications = await store.find_by_field("notifications", "toUserId", BOB)
    assert len(notifications) == 1
    assert notifications[0].data["message"] == "Alice started following you"
    assert notifications[0].data["actionUrl"] == "/user/alice"


@pytest.mark.asyncio
async def test_follow_rejections(client, store):
    await _seed_pair(store)

    response = await client.post(
        "/api/users/follow", json={"currentUserId": ALICE, "targetUserId": ALICE, "action": "follow"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Cannot follow yourself", "success": False}

    response = await client.post(
        "/api/users/follow", json={"currentUserId": ALICE, "targetUserId": BOB, "action": "unfollow"}
    )
    assert response.json()["error"] == "Not following this user"

    await client.post("/api/users/follow", json={"currentUserId": ALICE, "targetUserId": BOB, "action": "follow"})
    response = await client.post(
        "/api/users/follow", json={"currentUserId": ALICE, "targetUserId": BOB, "action": "follow"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Already following this user"

    response = await client.post(
        "/api/users/follow", json={"currentUserId": ALICE, "targetUserId": "c" * 28, "action": "follow"}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unfollow_removes_both_sides(client, store):
    await store.set("users", ALICE, {"following": [BOB]})
    await store.set("users", BOB, {"followers": [ALICE]})

    response = await client.post(
        "/api/users/follow", json={"currentUserId": ALICE, "targetUserId": BOB, "action": "unfollow"}
    )

    assert response.json()["following"] == []
    assert (await store.get("users", BOB))["followers"] == []


@pytest.mark.asyncio
async def test_profile_lookup_by_author_id(client, store):
    author_id = "507f1f77bcf86cd799439011"
    await store.set("users", ALICE, {"authorId": author_id})
    await store.set("userProfiles", ALICE, {"username": "alice", "bio": "hi"})

    response = await client.get(f"/api/users/{author_id}")

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["_id"] == author_id
    assert user["username"] == "alice"
    assert user["displayName"] == "alice"

    response = await client.get(f"/api/users/{BOB}")
    assert response.json()["user"]["username"] == "Unknown User"


@pytest.mark.asyncio
async def test_recommendations_skip_requesting_user(client, store):
    await store.set("users", ALICE, {"displayName": "Alice"})
    await store.set("users", BOB, {"email": "bob@example.com"})
    await store.set(f"users/{BOB}/movies", "550", {"title": "Fight Club"})
    await store.set(f"users/{ALICE}/movies", "13", {"title": "Forrest Gump"})

    response = await client.get("/api/recommendations", params={"userId": ALICE})

    body = response.json()
    assert body["total"] == 1
    entry = body["recommendations"][0]
    assert entry["user"]["displayName"] == "bob"
    assert entry["items"] == [{"id": "550", "title": "Fight Club"}]
