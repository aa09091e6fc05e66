"""SQL-backed article store."""

from datetime import datetime, timedelta

from sqlalchemy import delete, func, select

from trendpress.core.exceptions import DatabaseError
from trendpress.core.logging import get_logger
from trendpress.core.types import Clock, SessionFactory, utc_now
from trendpress.models.article import Article, ArticleStatus
from trendpress.models.keyword import CrawlLog, Keyword
from trendpress.services.storage.schemas import (
    ArticleDraft,
    ArticleRecord,
    CrawlLogRecord,
    StoreStats,
)

logger = get_logger(__name__)


class SQLArticleStore:
    """Article persistence on SQLAlchemy async sessions.

    Args:
        session_factory: Async session factory
        clock: Time source for ``created_at``/``published_at`` and window cutoffs
    """

    def __init__(self, session_factory: SessionFactory, clock: Clock = utc_now) -> None:
        self.session_factory = session_factory
        self.clock = clock

    async def has_article_for_keyword(self, keyword: str, within_hours: float) -> bool:
        """Whether an article for ``keyword`` was created in the last ``within_hours``."""
        cutoff = self.clock() - timedelta(hours=within_hours)
        async with self.session_factory() as session:
            result = await session.execute(
                select(Article.id)
                .where(func.lower(Article.keyword) == keyword.lower())
                .where(Article.created_at >= cutoff)
                .limit(1)
            )
            return result.scalar_one_or_none() is not None

    async def insert_article(self, draft: ArticleDraft) -> ArticleRecord:
        """Store a generated article.

        Raises:
            DatabaseError: If the insert fails (e.g. slug collision)
        """
        now = self.clock()
        published_at = now if draft.status == ArticleStatus.PUBLISHED else None
        try:
            async with self.session_factory() as session:
                row = Article(
                    **draft.model_dump(),
                    created_at=now,
                    published_at=published_at,
                )
                session.add(row)
                await session.commit()
                await session.refresh(row)
                record = ArticleRecord.model_validate(row)
        except Exception as e:
            raise DatabaseError(
                f"Failed to insert article: {e}",
                operation="insert_article",
                context={"keyword": draft.keyword, "slug": draft.slug},
            ) from e

        logger.info("Article saved", article_id=record.id, slug=record.slug, status=record.status.value)
        return record

    async def mark_published(
        self, article_id: int, published_at: datetime | None = None
    ) -> ArticleRecord:
        """Flip a draft to published.

        Args:
            article_id: Article to publish
            published_at: Publish time, defaults to now

        Raises:
            DatabaseError: If the article is missing or the update fails
        """
        try:
            async with self.session_factory() as session:
                row = await session.get(Article, article_id)
                if row is None:
                    raise LookupError(f"article {article_id} not found")
                row.status = ArticleStatus.PUBLISHED
                row.published_at = published_at or self.clock()
                await session.commit()
                await session.refresh(row)
                record = ArticleRecord.model_validate(row)
        except Exception as e:
            raise DatabaseError(
                f"Failed to publish article: {e}",
                operation="mark_published",
                context={"article_id": article_id},
            ) from e

        logger.info("Article marked published", article_id=record.id, slug=record.slug)
        return record

    async def delete_article(self, article_id: int) -> None:
        """Remove an article row; a missing id is a no-op.

        Raises:
            DatabaseError: If the delete fails
        """
        try:
            async with self.session_factory() as session:
                await session.execute(delete(Article).where(Article.id == article_id))
                await session.commit()
        except Exception as e:
            raise DatabaseError(
                f"Failed to delete article: {e}",
                operation="delete_article",
                context={"article_id": article_id},
            ) from e

    async def list_published(self, limit: int) -> list[ArticleRecord]:
        """Most recently published articles."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(Article)
                .where(Article.status == ArticleStatus.PUBLISHED)
                .order_by(Article.published_at.desc(), Article.id.desc())
                .limit(limit)
            )
            return [ArticleRecord.model_validate(row) for row in result.scalars()]

    async def get_stats(self) -> StoreStats:
        """Aggregate counters across keywords, articles, and crawl logs."""
        now = self.clock()
        today_start = datetime(now.year, now.month, now.day, tzinfo=now.tzinfo)
        async with self.session_factory() as session:
            total_keywords = await session.scalar(select(func.count(Keyword.id)))
            total_articles = await session.scalar(select(func.count(Article.id)))
            published = await session.scalar(
                select(func.count(Article.id)).where(Article.status == ArticleStatus.PUBLISHED)
            )
            today = await session.scalar(
                select(func.count(Article.id)).where(Article.created_at >= today_start)
            )
            views = await session.scalar(select(func.coalesce(func.sum(Article.views), 0)))
            crawls = await session.execute(
                select(CrawlLog).order_by(CrawlLog.crawled_at.desc(), CrawlLog.id.desc()).limit(10)
            )
            recent_crawls = [CrawlLogRecord.model_validate(row) for row in crawls.scalars()]

        return StoreStats(
            total_keywords=total_keywords or 0,
            total_articles=total_articles or 0,
            published_articles=published or 0,
            today_articles=today or 0,
            total_views=views or 0,
            recent_crawls=recent_crawls,
        )


__all__ = ["SQLArticleStore"]
