"""
AsyncEngine factory and schema bootstrap.

The engine is created once in the FastAPI lifespan and disposed on shutdown.
init_schema() doubles as the connect-or-fail-fast check: if the database is
unreachable the exception escapes the lifespan and uvicorn aborts startup.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from services.weatherapi.config import Settings, settings as default_settings
from services.weatherapi.db.models import Base
from services.weatherapi.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _async_url(database_url: str) -> str:
    """postgresql://... -> postgresql+asyncpg://... (other schemes untouched)."""
    for prefix in ("postgresql://", "postgres://"):
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix):]
    return database_url


def create_engine(settings: Settings = default_settings) -> AsyncEngine:
    """
    Create the async engine from DATABASE_URL.

    Raises ConfigurationError if DATABASE_URL is not set.
    """
    if not settings.database_url:
        raise ConfigurationError("DATABASE_URL is not defined in environment variables.")

    return create_async_engine(
        _async_url(settings.database_url),
        pool_pre_ping=True,
        echo=settings.debug and settings.environment == "development",
    )


async def init_schema(engine: AsyncEngine) -> None:
    """Connect and create missing tables (including the unique index on city)."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception:
        logger.error("Database connection error", exc_info=True)
        raise
    logger.info("Database connected successfully")

