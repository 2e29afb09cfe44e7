import uuid
import httpx
import pytest
import pytest_asyncio
from app.db.session import get_db
from app.main import create_app


@pytest_asyncio.fixture
async def api(session_factory):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _signup(api, username, **extra):
    resp = await api.post("/api/auth/signup", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
        "name": username.title(),
        **extra,
    })
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


async def _add_photo(api, headers, url):
    resp = await api.post("/api/user/photos", json={"url": url, "caption": "moment"}, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["photo"]


@pytest.mark.asyncio
async def test_health(api):
    resp = await api.get("/health")
    assert resp.json() == {"status": "ok", "online": 0}

    resp = await api.get("/")
    assert resp.json()["message"] == "Swarsh API"


@pytest.mark.asyncio
async def test_unauthenticated_requests_get_structured_error(api):
    resp = await api.get("/api/match")
    assert resp.status_code == 401
    assert resp.json()["error"]["kind"] == "UnauthorizedError"

    resp = await api.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_signup_sets_cookie_and_me_works(api):
    resp = await api.post("/api/auth/signup", json={
        "username": "alice", "email": "alice@example.com", "password": "secret123",
    })
    assert "swarsh_session=" in resp.headers["set-cookie"]
    user = resp.json()["user"]
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    resp = await api.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    me = resp.json()["user"]
    assert me["id"] == user["id"]
    assert me["pairedWith"] is None
    assert me["settings"]["theme"] == "light"
    assert "passwordHash" not in me


@pytest.mark.asyncio
async def test_duplicate_signup_and_bad_body(api):
    await _signup(api, "alice")
    resp = await api.post("/api/auth/signup", json={
        "username": "alice", "email": "alice2@example.com", "password": "secret123",
    })
    assert resp.status_code == 409
    assert resp.json()["error"]["kind"] == "ConflictError"

    resp = await api.post("/api/auth/signup", json={"username": "bob"})
    assert resp.status_code == 400
    assert resp.json()["error"]["kind"] == "ValidationError"


@pytest.mark.asyncio
async def test_swipe_match_and_chat_flow(api):
    alice, alice_headers = await _signup(api, "alice")
    bob, bob_headers = await _signup(api, "bob")
    alice_photo = await _add_photo(api, alice_headers, "https://img.example.com/alice.jpg")
    bob_photo = await _add_photo(api, bob_headers, "https://img.example.com/bob.jpg")

    resp = await api.get("/api/swipe/next", headers=alice_headers)
    assert resp.status_code == 200
    candidate = resp.json()["photo"]
    assert candidate["id"] == bob_photo["id"]
    assert candidate["ownerId"] == bob["id"]

    resp = await api.post("/api/swipe", headers=alice_headers, json={
        "photoId": bob_photo["id"], "direction": "right", "photoOwnerId": bob["id"],
    })
    assert resp.json()["matched"] is False

    resp = await api.post("/api/swipe", headers=bob_headers, json={
        "photoId": alice_photo["id"], "direction": "right", "photoOwnerId": alice["id"],
    })
    body = resp.json()
    assert body["matched"] is True
    assert body["match"]["photoId"] == alice_photo["id"]

    resp = await api.get("/api/match", headers=alice_headers)
    data = resp.json()
    assert data["currentUserId"] == alice["id"]
    assert len(data["matches"]) == 1
    match = data["matches"][0]
    assert {match["user1"]["id"], match["user2"]["id"]} == {alice["id"], bob["id"]}
    assert match["user1"]["photos"]

    resp = await api.post("/api/message", headers=alice_headers, json={"receiverId": bob["id"], "content": "hi"})
    assert resp.status_code == 200
    message = resp.json()["message"]
    assert message["senderId"] == alice["id"]

    resp = await api.get("/api/message/unread-count", headers=bob_headers)
    assert resp.json() == {"count": 1}

    resp = await api.put(f"/api/message/read/{message['id']}", headers=bob_headers)
    assert resp.status_code == 200

    resp = await api.get(f"/api/message/conversation/{alice['id']}", headers=bob_headers)
    assert [m["content"] for m in resp.json()["messages"]] == ["hi"]
    assert resp.json()["messages"][0]["read"] is True


@pytest.mark.asyncio
async def test_swipe_errors(api):
    alice, alice_headers = await _signup(api, "alice")
    bob, _ = await _signup(api, "bob")

    resp = await api.post("/api/swipe", headers=alice_headers, json={
        "photoId": str(uuid.uuid4()), "direction": "like", "photoOwnerId": str(uuid.uuid4()),
    })
    assert resp.status_code == 404
    assert resp.json()["error"]["kind"] == "NotFoundError"

    resp = await api.post("/api/swipe", headers=alice_headers, json={
        "photoId": str(uuid.uuid4()), "direction": "maybe", "photoOwnerId": bob["id"],
    })
    assert resp.status_code == 400

    resp = await api.get("/api/swipe/next", headers=alice_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_invite_flow_switches_to_couple_mode(api):
    alice, alice_headers = await _signup(api, "alice")
    await _add_photo(api, alice_headers, "https://img.example.com/alice.jpg")
    stranger, stranger_headers = await _signup(api, "stranger")
    await _add_photo(api, stranger_headers, "https://img.example.com/stranger.jpg")

    resp = await api.post("/api/invite/generate", headers=alice_headers)
    token = resp.json()["token"]

    bob, bob_headers = await _signup(api, "bob", inviteToken=token)
    assert bob["pairedWith"]["id"] == alice["id"]

    resp = await api.get("/api/auth/me", headers=alice_headers)
    assert resp.json()["user"]["pairedWith"]["id"] == bob["id"]

    # Bob's feed is his partner's photo, never the stranger's
    resp = await api.get("/api/swipe/next", headers=bob_headers)
    assert resp.json()["coupleMode"] is True
    assert resp.json()["photo"]["ownerId"] == alice["id"]

    resp = await api.get(f"/api/users/{alice['id']}/photo", headers=bob_headers)
    assert resp.status_code == 200
    resp = await api.get(f"/api/users/{stranger['id']}/photo", headers=bob_headers)
    assert resp.status_code == 404

    # The token is gone
    resp = await api.post("/api/auth/signup", json={
        "username": "carol", "email": "carol@example.com", "password": "secret123", "inviteToken": token,
    })
    assert resp.status_code == 400
    assert resp.json()["error"]["kind"] == "InvalidTokenError"


@pytest.mark.asyncio
async def test_redeem_endpoint(api):
    alice, alice_headers = await _signup(api, "alice")
    bob, bob_headers = await _signup(api, "bob")
    token = (await api.post("/api/invite/generate", headers=alice_headers)).json()["token"]

    resp = await api.post("/api/invite/redeem", headers=bob_headers, json={"token": token})
    assert resp.status_code == 200
    assert resp.json() == {"pairedWith": {"id": alice["id"]}}

    resp = await api.post("/api/invite/redeem", headers=bob_headers, json={"token": token})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_profile_endpoints(api):
    _, headers = await _signup(api, "alice")

    resp = await api.put("/api/user/profile", headers=headers, json={
        "name": "Alice L", "age": 29, "preferences": {"food": "ramen"},
    })
    assert resp.status_code == 200
    assert resp.json()["user"]["preferences"]["food"] == "ramen"

    resp = await api.put("/api/user/settings", headers=headers, json={
        "settings": {"notifications": {"matches": False, "messages": True}, "theme": "dark"},
    })
    assert resp.json()["user"]["settings"]["theme"] == "dark"

    resp = await api.put("/api/user/settings", headers=headers, json={"settings": {"theme": "neon"}})
    assert resp.status_code == 400

    photo = await _add_photo(api, headers, "https://img.example.com/a.jpg")
    resp = await api.post("/api/user/profile-picture", headers=headers, json={"url": photo["url"]})
    assert resp.json()["url"] == photo["url"]

    resp = await api.delete(f"/api/user/photos/{photo['id']}", headers=headers)
    assert resp.status_code == 200
    resp = await api.get("/api/user/profile", headers=headers)
    assert resp.json()["user"]["photos"] == []
    assert resp.json()["user"]["profilePicture"] == photo["url"]


@pytest.mark.asyncio
async def test_logout_revokes_token(api):
    _, headers = await _signup(api, "alice")
    resp = await api.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200

    resp = await api.get("/api/auth/me", headers=headers)
    assert resp.status_code == 401
