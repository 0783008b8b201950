"""Database connection and session management."""
import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.engine.url import make_url

from surveygenie.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ON DELETE CASCADE and FK constraints unless the pragma is
    set per connection.
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine with the pool and SSL options used by the app."""
    parsed_url = make_url(database_url)
    is_sqlite = parsed_url.drivername.startswith("sqlite")

    connect_args = {}
    needs_ssl = (
        "heroku" in database_url or
        "amazonaws" in database_url or
        settings.environment == "production"
    )
    if needs_ssl and not is_sqlite:
        connect_args["ssl"] = "require"
        logger.debug("SSL connection enabled (ssl=require)")

    engine_kwargs = {
        "echo": False,
        "future": True,
        "connect_args": connect_args,
        "pool_pre_ping": True,
    }
    if not is_sqlite:
        engine_kwargs["pool_recycle"] = 3600
        engine_kwargs["pool_size"] = max(1, settings.db_pool_size)
        engine_kwargs["max_overflow"] = max(0, settings.db_max_overflow)
    engine_kwargs.update(kwargs)

    async_engine = create_async_engine(database_url, **engine_kwargs)
    enable_sqlite_foreign_keys(async_engine)
    return async_engine


try:
    engine = build_engine(settings.database_url)
    logger.debug("Database engine created successfully")
except Exception as e:
    logger.error(f"Failed to create database engine: {e}")
    raise

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for models
Base = declarative_base()


# Dependency for FastAPI
async def get_db():
    """FastAPI dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
