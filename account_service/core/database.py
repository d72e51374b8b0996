"""
Database configuration and connection management for the account service.
Implements async SQLAlchemy with connection pooling.
"""
from typing import Any, Dict
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
import structlog

from .config import Settings
from ..models.base import Base

logger = structlog.get_logger()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine; SQLite gets single-connection settings."""
    url = settings.DATABASE_URL
    options: Dict[str, Any] = {"echo": settings.DATABASE_ECHO}

    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            options["poolclass"] = StaticPool
    else:
        options.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=True,  # Validate connections before use
        )

    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables checked/created")


async def check_connection(engine: AsyncEngine) -> bool:
    """Check if database connection is healthy."""
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return False


async def close_db_connections(engine: AsyncEngine) -> None:
    """Close all database connections on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
