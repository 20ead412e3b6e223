# feedback_forms/core/database.py
"""
Database configuration for async operations

PostgreSQL (asyncpg) gets a real connection pool. SQLite (aiosqlite, used by
the test suite) gets a NullPool so connections never outlive the event loop
that opened them.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from feedback_forms.core.settings import settings
import logging

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"poolclass": NullPool}

    return {
        # Connection pool settings
        "pool_size": 10,  # Number of connections to maintain
        "max_overflow": 20,  # Additional connections beyond pool_size
        "pool_timeout": 30,  # Timeout for getting a connection from pool
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "pool_pre_ping": True,

        "connect_args": {
            "server_settings": {
                "application_name": "FeedbackForms",
            },
            "timeout": 60,
        },
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,  # Set to True for SQL query logging
    **_engine_options(settings.DATABASE_URL)
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Don't expire objects after commit
    autocommit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db():
    """
    Dependency for FastAPI routes
    Provides a database session with automatic cleanup
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        except Exception:
            # Validation and access failures
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Initialize database tables"""
    # Register every mapped class on Base.metadata before create_all
    from feedback_forms.models import admin, form, response  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Database initialized")


async def drop_db():
    """Drop all tables (test teardown)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped")


async def close_db():
    """Close database connections (call on shutdown)"""
    await engine.dispose()
    logger.info("✅ Database connections closed")
