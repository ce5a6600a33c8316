# app/adapters/outbound/persistence/database.py (async version)

import logging
from typing import Any, AsyncGenerator, Dict
from contextlib import asynccontextmanager
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.models import Base

# Configure logger
logger = logging.getLogger(__name__)

database_url = str(settings.DATABASE_URL)
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")


def engine_options(url: str) -> Dict[str, Any]:
    """
    Return create_async_engine keyword arguments suited to the backend.

    SQLite (aiosqlite) does not accept pool sizing options; an in-memory
    database must share one connection across sessions.
    """
    if url.startswith("sqlite"):
        return {
            "echo": False,
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "echo": False,
        "future": True,
        "pool_size": 20,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """SQLite ignores foreign keys unless each connection turns them on."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str) -> AsyncEngine:
    """Create the async engine for a database URL."""
    async_engine = create_async_engine(url, **engine_options(url))
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(async_engine)
    return async_engine


try:
    # Create async engine
    engine = build_engine(database_url)

    # Create async session factory
    AsyncSessionLocal = async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )

    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


async def create_tables(bind: AsyncEngine = None) -> None:
    """Create every mapped table that does not exist yet."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations,
    ensuring the session is closed at the end.

    Yields:
        AsyncSession: SQLAlchemy async session

    Example:
        ```python
        async with get_db_context() as db:
            result = await db.execute(select(Associacao))
            associacoes = result.scalars().all()
        ```
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection for use with FastAPI.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    async with get_db_context() as session:
        yield session
