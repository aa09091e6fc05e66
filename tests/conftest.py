"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from trendpress.core.database import create_session_factory, init_db
from trendpress.core.logging import setup_logging
from trendpress.infrastructure.http_client import HTTPClient

# Setup logging for tests
setup_logging()


class FakeClock:
    """Manually advanced clock for time-window tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 2025-01-15 12:00 UTC."""
    return FakeClock(datetime(2025, 1, 15, 12, 0, tzinfo=UTC))


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over a fresh in-memory SQLite database.

    StaticPool keeps one connection so every session sees the same database.

    Yields:
        Session factory with all tables created
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def mock_http_client() -> HTTPClient:
    """Create a mock HTTP client."""
    client = MagicMock(spec=HTTPClient)
    client.get = AsyncMock()
    client.get_text = AsyncMock()
    client.get_json = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def anyio_backend() -> str:
    """Specify backend for anyio.

    Returns:
        Backend name
    """
    return "asyncio"
