"""Base model mixins and utilities.

This module provides reusable pieces for common model patterns:
- UTCDateTime: timezone-aware datetime column that round-trips as UTC
- IntPKMixin: autoincrement integer primary key
- TimestampMixin: created_at field
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.types import TypeDecorator

from trendpress.core.database import Base


class UTCDateTime(TypeDecorator[datetime]):
    """DateTime column that always stores and returns UTC.

    SQLite drops the offset on the way in, so values are normalized to UTC
    before binding and tagged as UTC when loaded.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class IntPKMixin:
    """Mixin for an autoincrement integer primary key.

    Example:
        >>> class Keyword(Base, IntPKMixin):
        ...     __tablename__ = "keywords"
        ...     keyword: Mapped[str]
    """

    @declared_attr
    @classmethod
    def id(cls) -> Mapped[int]:
        """Integer primary key."""
        return mapped_column(Integer, primary_key=True, autoincrement=True)


class TimestampMixin:
    """Mixin for a created_at timestamp."""

    @declared_attr
    @classmethod
    def created_at(cls) -> Mapped[datetime]:
        """Timestamp when record was created.

        Returns:
            DateTime column with default as current UTC time
        """
        return mapped_column(
            UTCDateTime(),
            nullable=False,
            default=lambda: datetime.now(UTC),
            server_default=func.now(),
        )


__all__ = [
    "Base",
    "IntPKMixin",
    "TimestampMixin",
    "UTCDateTime",
]
