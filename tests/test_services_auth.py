import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from app.core.exceptions import ConflictError, UnauthorizedError, ValidationError, NotFoundError
from app.models.auth_session import AuthSession
from app.services.auth_service import AuthService
from app.services.user_service import UserService


@pytest.mark.asyncio
async def test_signup_then_login_and_resolve(db_session):
    service = AuthService(db_session)
    user, first = await service.signup(username="alice", email="alice@example.com", password="secret123", name="Alice", age=27)

    assert user.password_hash != "secret123"
    assert user.settings["theme"] == "light"

    logged_in, second = await service.login("ALICE@example.com", "secret123", user_agent="pytest")
    assert logged_in.id == user.id
    assert second.token != first.token

    resolved = await service.resolve_session(second.token)
    assert resolved.id == user.id


@pytest.mark.asyncio
async def test_signup_rejects_duplicates_and_weak_passwords(db_session):
    service = AuthService(db_session)
    await service.signup(username="alice", email="alice@example.com", password="secret123")

    with pytest.raises(ConflictError):
        await service.signup(username="alice", email="other@example.com", password="secret123")
    with pytest.raises(ConflictError):
        await service.signup(username="alicia", email="alice@example.com", password="secret123")
    with pytest.raises(ValidationError):
        await service.signup(username="bob", email="bob@example.com", password="123")


@pytest.mark.asyncio
async def test_login_with_wrong_password(db_session):
    service = AuthService(db_session)
    await service.signup(username="alice", email="alice@example.com", password="secret123")

    with pytest.raises(UnauthorizedError):
        await service.login("alice@example.com", "wrong-pass")
    with pytest.raises(UnauthorizedError):
        await service.login("nobody@example.com", "secret123")


@pytest.mark.asyncio
async def test_expired_and_logged_out_sessions_are_rejected(db_session):
    service = AuthService(db_session)
    user, auth_session = await service.signup(username="alice", email="alice@example.com", password="secret123")

    stale = AuthSession(
        user_id=user.id,
        token="stale-token",
        expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
    )
    db_session.add(stale)
    await db_session.commit()

    with pytest.raises(UnauthorizedError):
        await service.resolve_session("stale-token")

    await service.logout(auth_session.token)
    with pytest.raises(UnauthorizedError):
        await service.resolve_session(auth_session.token)
    with pytest.raises(UnauthorizedError):
        await service.resolve_session(None)


@pytest.mark.asyncio
async def test_profile_photos_and_settings(db_session, make_user):
    alice = await make_user("alice")
    service = UserService(db_session)

    first = await service.add_photo(alice.id, " https://img.example.com/a.jpg ", caption="Beach", tags=["sun", " ", "sea"])
    second = await service.add_photo(alice.id, "https://img.example.com/b.jpg")
    assert first.url == "https://img.example.com/a.jpg"
    assert first.tags == ["sun", "sea"]

    profile = await service.update_profile(alice.id, name="Alice L", preferences={"food": "ramen", "song": None})
    assert profile.name == "Alice L"
    assert profile.preferences == {"food": "ramen"}
    assert [p.id for p in profile.photos] == [first.id, second.id]

    await service.delete_photo(alice.id, first.id)
    profile = await service.get_profile(alice.id)
    assert [p.id for p in profile.photos] == [second.id]

    profile = await service.update_settings(alice.id, {"notifications": {"matches": False, "messages": True}, "theme": "dark"})
    assert profile.settings["theme"] == "dark"

    with pytest.raises(ValidationError):
        await service.add_photo(alice.id, "   ")


@pytest.mark.asyncio
async def test_cannot_delete_someone_elses_photo(db_session, make_user, make_photo):
    alice = await make_user("alice")
    bob = await make_user("bob")
    bob_photo = await make_photo(bob)

    with pytest.raises(NotFoundError):
        await UserService(db_session).delete_photo(alice.id, bob_photo.id)


@pytest.mark.asyncio
async def test_set_online_only_commits_on_change(mock_session):
    service = UserService(mock_session)
    user = MagicMock()
    user.is_online = False
    mock_session.get.return_value = user

    await service.set_online("user-1", True)
    assert user.is_online is True
    mock_session.commit.assert_called_once()

    await service.set_online("user-1", True)
    mock_session.commit.assert_called_once()


@pytest.mark.asyncio
async def test_get_user_missing(mock_session):
    with pytest.raises(NotFoundError):
        await UserService(mock_session).get_user("missing")
