"""
Database configuration with async support
"""

import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as AsyncSessionSQLModel
from typing import Any, AsyncGenerator, Dict

from app.core.config import settings

# Configure logging based on environment
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

logger.info(f"Environment: {settings.ENVIRONMENT}")
logger.info(f"Database URL configured: {bool(settings.DATABASE_URL)}")


def engine_options(url: str) -> Dict[str, Any]:
    """Connection pool options; the pool sizing only applies to the postgres driver"""
    options: Dict[str, Any] = {
        "echo": settings.DB_ECHO,
        "future": True,
        "pool_pre_ping": True,
    }
    if url.startswith("postgresql+asyncpg://"):
        options.update(
            pool_size=20,
            max_overflow=30,
            pool_recycle=3600,  # Recycle connections after 1 hour
            connect_args={
                "server_settings": {
                    "application_name": "forum_follow_service",
                }
            },
        )
    return options


async_engine = create_async_engine(
    settings.async_database_url,
    **engine_options(settings.async_database_url)
)

# Async session factory
AsyncSessionLocal = sessionmaker(
    bind=async_engine,
    class_=AsyncSessionSQLModel,
    expire_on_commit=False,
    autoflush=False
)


async def init_db():
    """Initialize database tables"""
    import app.models  # noqa: F401  registers tables on SQLModel.metadata

    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Async database session dependency
    Usage:
    async def some_endpoint(db: AsyncSession = Depends(get_db)):
        ...
    """
    try:
        async with AsyncSessionLocal() as session:
            yield session
    except Exception as e:
        logger.error(f"Database session creation failed: {str(e)}", exc_info=True)
        raise
