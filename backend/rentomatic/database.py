"""
Rentomatic Backend - Database Engine & Session Management
==========================================================

What:  Async SQLAlchemy engine factory, session factory and declarative Base.
Why:   Centralizes all connection logic in one place, so SqlRoomRepository only
       ever receives a ready-made session factory.
How:   `create_engine_from_settings()` builds an asyncpg engine from Settings.
       The application factory creates one engine per process, stores it on
       `app.state`, and disposes it in the lifespan shutdown.

Connection Pooling:
    Pool sizing, pre-ping and recycling are left to SQLAlchemy, configured
    from Settings. Each gunicorn worker owns its own engine and pool.
"""

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from rentomatic.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shared metadata is what Alembic reads for --autogenerate and what tests
    use with `create_all` against SQLite.
    """
    pass


def create_engine_from_settings(settings: Settings, **overrides: Any) -> AsyncEngine:
    """
    Build the async engine for the application database.

    Args:
        settings:  Source of credentials (POSTGRES_*, APPLICATION_DB) and pool options
        overrides: Extra keyword arguments for create_async_engine (e.g. poolclass)
    """
    options = {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": 3600,
        # SQL echo is only useful while developing
        "echo": settings.log_level == "DEBUG",
    }
    options.update(overrides)
    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows stay readable after the session closes
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close every pooled connection. Called from the lifespan shutdown."""
    await engine.dispose()
