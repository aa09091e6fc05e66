"""Common type definitions for the application.

This module provides shared type aliases used across multiple modules
to avoid duplication and ensure consistency.
"""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

# Async session factory used by the SQL stores
SessionFactory = Callable[[], AsyncSession]

# Injectable time source; tests pass a simulated clock
Clock = Callable[[], datetime]

# Injectable async sleep; tests pass a no-op
Sleeper = Callable[[float], Awaitable[None]]


def utc_now() -> datetime:
    """Default clock returning the current UTC time."""
    return datetime.now(UTC)


__all__ = [
    "Clock",
    "SessionFactory",
    "Sleeper",
    "utc_now",
]
