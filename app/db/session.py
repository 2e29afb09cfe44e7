import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from app.core.config import settings
from app.core.exceptions import StorageError

logger = logging.getLogger(__name__)

# Only enable echo in development mode
is_dev_mode = settings.ENV.lower() in ["dev", "development", "local"]

engine_kwargs = {"echo": is_dev_mode, "pool_pre_ping": True}
if settings.DATABASE_URL.startswith("postgresql"):
    engine_kwargs.update(pool_size=10, max_overflow=20)

engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def get_db():
    async with AsyncSessionLocal() as session:
        yield session

async def commit_or_raise(session: AsyncSession):
    """Commit the unit of work, turning driver failures into StorageError."""
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Commit failed")
        raise StorageError("Failed to persist changes") from e
