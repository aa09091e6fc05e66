"""Keyword and CrawlLog ORM models.

A Keyword row is an accepted, deduplicated trending term. ``processed`` only
ever moves from False to True.
"""

from datetime import UTC, datetime

from sqlalchemy import Boolean, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from trendpress.models.base import Base, IntPKMixin, UTCDateTime


class Keyword(Base, IntPKMixin):
    """Persisted trending keyword.

    Attributes:
        keyword: Normalized keyword text
        source: Source adapter that first reported it
        rank: Display position at the source (1 = most prominent)
        detected_at: When the keyword was inserted
        processed: Whether the pipeline already handled it
    """

    __tablename__ = "keywords"

    keyword: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    detected_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )
    processed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )

    __table_args__ = (
        Index("ix_keywords_detected_at", "detected_at"),
        Index("ix_keywords_processed_detected_at", "processed", "detected_at"),
    )

    def __repr__(self) -> str:
        return f"<Keyword(id={self.id}, keyword='{self.keyword}', source={self.source})>"


class CrawlLog(Base, IntPKMixin):
    """One row per pipeline collection pass."""

    __tablename__ = "crawl_logs"

    source: Mapped[str] = mapped_column(String(50), nullable=False)
    keywords_found: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    new_keywords: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    crawled_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return (
            f"<CrawlLog(source={self.source}, found={self.keywords_found}, "
            f"new={self.new_keywords})>"
        )


__all__ = ["CrawlLog", "Keyword"]
