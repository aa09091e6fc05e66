"""SQL-backed keyword store."""

from datetime import timedelta

from sqlalchemy import func, select, update

from trendpress.core.exceptions import DatabaseError
from trendpress.core.logging import get_logger
from trendpress.core.types import Clock, SessionFactory, utc_now
from trendpress.models.keyword import CrawlLog, Keyword
from trendpress.services.storage.schemas import (
    CrawlLogRecord,
    InsertResult,
    InsertStatus,
    KeywordRecord,
)

logger = get_logger(__name__)


class SQLKeywordStore:
    """Keyword persistence on SQLAlchemy async sessions.

    Keyword comparisons are case-insensitive, matching the batch dedup key.
    Each operation runs in its own short session; nothing wraps a whole
    pipeline stage in one transaction.

    Args:
        session_factory: Async session factory
        clock: Time source used for ``detected_at`` and window cutoffs
    """

    def __init__(self, session_factory: SessionFactory, clock: Clock = utc_now) -> None:
        self.session_factory = session_factory
        self.clock = clock

    async def insert(self, keyword: str, source: str, rank: int | None) -> InsertResult:
        """Insert a keyword record.

        Returns:
            INSERTED with the new record, or FAILED with the error message
        """
        try:
            async with self.session_factory() as session:
                row = Keyword(keyword=keyword, source=source, rank=rank, detected_at=self.clock())
                session.add(row)
                await session.commit()
                await session.refresh(row)
                record = KeywordRecord.model_validate(row)
        except Exception as e:
            logger.error("Keyword insert failed", keyword=keyword, source=source, error=str(e))
            return InsertResult(status=InsertStatus.FAILED, error=str(e))

        return InsertResult(status=InsertStatus.INSERTED, record=record)

    async def query_unprocessed(self, limit: int) -> list[KeywordRecord]:
        """Unprocessed keywords, most recently detected first.

        Args:
            limit: Maximum records to return
        """
        if limit <= 0:
            return []
        async with self.session_factory() as session:
            result = await session.execute(
                select(Keyword)
                .where(Keyword.processed.is_(False))
                .order_by(Keyword.detected_at.desc(), Keyword.id.desc())
                .limit(limit)
            )
            return [KeywordRecord.model_validate(row) for row in result.scalars()]

    async def mark_processed(self, keyword_id: int) -> None:
        """Set ``processed`` on a keyword. Idempotent.

        Raises:
            DatabaseError: If the update fails
        """
        try:
            async with self.session_factory() as session:
                await session.execute(
                    update(Keyword).where(Keyword.id == keyword_id).values(processed=True)
                )
                await session.commit()
        except Exception as e:
            raise DatabaseError(
                f"Failed to mark keyword {keyword_id} processed: {e}",
                operation="mark_processed",
                context={"keyword_id": keyword_id},
            ) from e

    async def is_recent_duplicate(self, keyword: str, window_hours: float) -> bool:
        """Whether the keyword was recorded within the last ``window_hours``."""
        cutoff = self.clock() - timedelta(hours=window_hours)
        async with self.session_factory() as session:
            result = await session.execute(
                select(Keyword.id)
                .where(func.lower(Keyword.keyword) == keyword.lower())
                .where(Keyword.detected_at >= cutoff)
                .limit(1)
            )
            return result.scalar_one_or_none() is not None

    async def query_recent(self, window_hours: float) -> list[KeywordRecord]:
        """Keywords detected within the last ``window_hours``, newest first."""
        cutoff = self.clock() - timedelta(hours=window_hours)
        async with self.session_factory() as session:
            result = await session.execute(
                select(Keyword)
                .where(Keyword.detected_at >= cutoff)
                .order_by(Keyword.detected_at.desc(), Keyword.id.desc())
            )
            return [KeywordRecord.model_validate(row) for row in result.scalars()]

    async def log_crawl(self, source: str, keywords_found: int, new_keywords: int) -> None:
        """Record one collection pass."""
        async with self.session_factory() as session:
            session.add(
                CrawlLog(
                    source=source,
                    keywords_found=keywords_found,
                    new_keywords=new_keywords,
                    crawled_at=self.clock(),
                )
            )
            await session.commit()

    async def recent_crawls(self, limit: int = 10) -> list[CrawlLogRecord]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(CrawlLog).order_by(CrawlLog.crawled_at.desc(), CrawlLog.id.desc()).limit(limit)
            )
            return [CrawlLogRecord.model_validate(row) for row in result.scalars()]


__all__ = ["SQLKeywordStore"]
