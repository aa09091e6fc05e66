"""Database configuration and session management.

This module provides SQLAlchemy 2.0 async engine and session factories.
It includes the Base class for all ORM models and utility functions.
Engines are created explicitly and owned by the DI container, so tests can
build an in-memory SQLite engine without touching global state.
"""

import re
from pathlib import Path
from typing import ClassVar

from sqlalchemy import MetaData, make_url, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, declared_attr

from trendpress.core.config import Config, get_config
from trendpress.core.logging import get_logger

logger = get_logger(__name__)

# ============================================
# Naming Convention
# ============================================
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ============================================
# Base Model
# ============================================


class Base(DeclarativeBase):
    """Base class for all ORM models.

    Provides consistent snake_case table naming, shared metadata with
    naming conventions, and a generic ``__repr__``.
    """

    metadata: ClassVar[MetaData] = metadata

    @declared_attr.directive
    @classmethod
    def __tablename__(cls) -> str:
        """Generate table name from class name.

        Returns:
            Snake case table name
        """
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()

    def __repr__(self) -> str:
        columns = ", ".join(
            f"{k}={v!r}"
            for k, v in self.__dict__.items()
            if not k.startswith("_") and k != "metadata"
        )
        return f"{self.__class__.__name__}({columns})"


# ============================================
# Engine and Session
# ============================================


def create_engine(config: Config | None = None) -> AsyncEngine:
    """Create the async engine for the configured database.

    Args:
        config: Application config (defaults to the global singleton)

    Returns:
        AsyncEngine bound to ``config.database_url``
    """
    config = config or get_config()
    url = str(config.database_url)
    kwargs: dict = {"echo": config.database_echo}
    database = make_url(url).database
    if url.startswith("sqlite") and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    elif url.startswith("postgresql"):
        kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True, pool_recycle=3600)
    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine.

    Args:
        engine: Async engine

    Returns:
        Session factory producing AsyncSession instances
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that don't exist yet.

    Example:
        >>> await init_db(engine)
    """
    # Register models on the metadata
    import trendpress.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized", url=engine.url.render_as_string(hide_password=True))


async def close_db(engine: AsyncEngine) -> None:
    """Dispose engine connections on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")


# ============================================
# Health Check
# ============================================


async def check_db_connection(engine: AsyncEngine) -> bool:
    """Check if database connection is healthy.

    Returns:
        True if connection is successful, False otherwise
    """
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database health check failed", error=str(e), exc_info=True)
        return False


__all__ = [
    "Base",
    "check_db_connection",
    "close_db",
    "create_engine",
    "create_session_factory",
    "init_db",
    "metadata",
]
