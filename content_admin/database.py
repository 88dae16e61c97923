import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from content_admin.config import settings
from content_admin.row_store import RowStore

logger = logging.getLogger(__name__)


def build_engine(database_url: str, environment: str = "development"):
    """Create the async engine, sizing the pool only for server databases."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False)

    if environment == "production":
        return create_async_engine(
            database_url,
            pool_size=20,
            max_overflow=50,
            pool_timeout=60,
            pool_recycle=1800,
            pool_pre_ping=True,
        )
    return create_async_engine(
        database_url,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_pre_ping=True,
    )


engine = build_engine(settings.database_url, settings.environment)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.error(f"Database session error: {e}")
            raise


async def get_row_store(request: Request, db: AsyncSession = Depends(get_db)) -> RowStore:
    app_settings = getattr(request.app.state, "settings", settings)
    return RowStore(
        db,
        max_attempts=app_settings.store_max_attempts,
        base_delay=app_settings.store_base_delay,
    )
