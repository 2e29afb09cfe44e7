import os

# Keep the module-level engine off Postgres while testing
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///./swarsh_test.db")

import uuid
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from app.db.base import Base
from app.models import User, Photo
from app.realtime.registry import ConnectionRegistry
from app.realtime.notifier import RealtimeNotifier


@pytest.fixture
def mock_session():
    session = AsyncMock()

    # Setup execute result
    mock_result = MagicMock()
    # Ensure scalar_one_or_none returns a value, not a coroutine
    mock_result.scalar_one_or_none.return_value = None
    mock_result.scalars.return_value.all.return_value = []
    mock_result.scalars.return_value.first.return_value = None

    session.execute.side_effect = None
    session.execute.return_value = mock_result

    # Configure session.get to return None by default
    session.get.return_value = None

    # Standard methods
    session.add = MagicMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()

    return session


@pytest.fixture
def mock_session_factory(mock_session):
    """Stand-in for AsyncSessionLocal yielding mock_session as a context manager."""
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = mock_session
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'swarsh.db'}")

    # Enforce foreign keys like Postgres does
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def notifier(registry):
    return RealtimeNotifier(registry)


@pytest.fixture
def fake_socket():
    """Build a WebSocket double that records pushed frames."""
    def _make():
        ws = MagicMock()
        ws.send_json = AsyncMock()
        ws.close = AsyncMock()
        return ws
    return _make


@pytest.fixture
def make_user(db_session):
    async def _make(username: str, **fields) -> User:
        user = User(
            username=username,
            email=fields.pop("email", f"{username}@example.com"),
            password_hash=fields.pop("password_hash", "not-a-real-hash"),
            name=fields.pop("name", username.title()),
            **fields,
        )
        db_session.add(user)
        await db_session.commit()
        return user
    return _make


@pytest.fixture
def make_photo(db_session):
    async def _make(owner: User, url: str = None, **fields) -> Photo:
        photo = Photo(user_id=owner.id, url=url or f"https://img.example.com/{uuid.uuid4().hex}.jpg", **fields)
        db_session.add(photo)
        await db_session.commit()
        return photo
    return _make


@pytest.fixture
def sent_events():
    """Event names pushed to a fake socket, in order."""
    def _events(ws) -> list:
        return [c.args[0]["event"] for c in ws.send_json.call_args_list]
    return _events
