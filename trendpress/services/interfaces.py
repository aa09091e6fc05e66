"""Collaborator interfaces consumed by the trend pipeline.

The pipeline depends on these protocols only; the SQL stores, news fetcher,
LLM generator, and JSON publisher are the production implementations, and
tests substitute in-memory fakes.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from trendpress.services.generator.base import GeneratedArticle
from trendpress.services.news.base import NewsContext
from trendpress.services.storage.schemas import (
    ArticleDraft,
    ArticleRecord,
    InsertResult,
    KeywordRecord,
    StoreStats,
)


@runtime_checkable
class KeywordStore(Protocol):
    async def insert(self, keyword: str, source: str, rank: int | None) -> InsertResult:
        """Insert a keyword. Returns INSERTED or FAILED, never raises."""
        ...

    async def query_unprocessed(self, limit: int) -> list[KeywordRecord]:
        """Unprocessed records, most recently detected first."""
        ...

    async def mark_processed(self, keyword_id: int) -> None: ...

    async def is_recent_duplicate(self, keyword: str, window_hours: float) -> bool: ...

    async def query_recent(self, window_hours: float) -> list[KeywordRecord]: ...

    async def log_crawl(self, source: str, keywords_found: int, new_keywords: int) -> None: ...


@runtime_checkable
class ArticleStore(Protocol):
    async def has_article_for_keyword(self, keyword: str, within_hours: float) -> bool: ...

    async def insert_article(self, draft: ArticleDraft) -> ArticleRecord: ...

    async def mark_published(
        self, article_id: int, published_at: datetime | None = None
    ) -> ArticleRecord: ...

    async def delete_article(self, article_id: int) -> None: ...

    async def list_published(self, limit: int) -> list[ArticleRecord]: ...

    async def get_stats(self) -> StoreStats: ...


@runtime_checkable
class NewsContextProvider(Protocol):
    async def fetch_news_for_keyword(self, keyword: str) -> NewsContext:
        """Gather news for a keyword. May be empty; must not raise."""
        ...


@runtime_checkable
class ArticleGenerator(Protocol):
    async def generate(self, keyword: str, news: NewsContext) -> GeneratedArticle | None:
        """Produce an article, or None when there is nothing to write about."""
        ...


@runtime_checkable
class Publisher(Protocol):
    async def publish(self, article: ArticleRecord, trend_keywords: list[str]) -> None: ...

    async def refresh_index(
        self, articles: list[ArticleRecord], trend_keywords: list[str]
    ) -> None: ...


__all__ = [
    "ArticleGenerator",
    "ArticleStore",
    "KeywordStore",
    "NewsContextProvider",
    "Publisher",
]
