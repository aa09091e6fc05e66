"""In-memory collaborators for pipeline tests."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from trendpress.config.pipeline import PipelineConfig
from trendpress.config.sources import SourceConfig
from trendpress.models.article import ArticleStatus
from trendpress.services.collector.base import BaseTrendSource, CandidateKeyword
from trendpress.services.collector.classifier import KeywordClassifier
from trendpress.services.generator.base import GeneratedArticle
from trendpress.services.news.base import NewsArticle, NewsContext
from trendpress.services.pipeline.orchestrator import TrendPipeline
from trendpress.services.storage.schemas import (
    ArticleDraft,
    ArticleRecord,
    InsertResult,
    InsertStatus,
    KeywordRecord,
    StoreStats,
)


class StaticSource(BaseTrendSource):
    """Source returning a fixed list of texts, or failing."""

    def __init__(self, name: str, texts: list[str], error: Exception | None = None) -> None:
        super().__init__(SourceConfig())
        self.name = name
        self.texts = texts
        self.error = error

    async def _fetch(self) -> list[CandidateKeyword]:
        if self.error is not None:
            raise self.error
        return self._to_candidates(self.texts)


class InMemoryKeywordStore:
    def __init__(self, clock) -> None:
        self.clock = clock
        self.records: list[KeywordRecord] = []
        self.crawls: list[tuple[str, int, int]] = []

    def seed(self, *keywords: str) -> list[KeywordRecord]:
        """Add unprocessed records; later ones sort as newer."""
        added = []
        for keyword in keywords:
            record = KeywordRecord(
                id=len(self.records) + 1,
                keyword=keyword,
                source="seed",
                rank=1,
                detected_at=self.clock(),
            )
            self.records.append(record)
            added.append(record)
        return added

    @property
    def unprocessed(self) -> list[str]:
        return [r.keyword for r in self.records if not r.processed]

    async def insert(self, keyword, source, rank) -> InsertResult:
        record = KeywordRecord(
            id=len(self.records) + 1,
            keyword=keyword,
            source=source,
            rank=rank,
            detected_at=self.clock(),
        )
        self.records.append(record)
        return InsertResult(status=InsertStatus.INSERTED, record=record)

    def _newest_first(self, records: list[KeywordRecord]) -> list[KeywordRecord]:
        return sorted(records, key=lambda r: (r.detected_at, r.id), reverse=True)

    async def query_unprocessed(self, limit) -> list[KeywordRecord]:
        if limit <= 0:
            return []
        pending = self._newest_first([r for r in self.records if not r.processed])
        return [r.model_copy() for r in pending[:limit]]

    async def mark_processed(self, keyword_id) -> None:
        for record in self.records:
            if record.id == keyword_id:
                record.processed = True

    async def is_recent_duplicate(self, keyword, window_hours) -> bool:
        cutoff = self.clock() - timedelta(hours=window_hours)
        return any(
            r.keyword.lower() == keyword.lower() and r.detected_at >= cutoff for r in self.records
        )

    async def query_recent(self, window_hours) -> list[KeywordRecord]:
        cutoff = self.clock() - timedelta(hours=window_hours)
        return self._newest_first([r for r in self.records if r.detected_at >= cutoff])

    async def log_crawl(self, source, keywords_found, new_keywords) -> None:
        self.crawls.append((source, keywords_found, new_keywords))


class InMemoryArticleStore:
    def __init__(self, clock) -> None:
        self.clock = clock
        self.articles: list[ArticleRecord] = []
        self._next_id = 1

    async def has_article_for_keyword(self, keyword, within_hours) -> bool:
        cutoff = self.clock() - timedelta(hours=within_hours)
        return any(
            a.keyword.lower() == keyword.lower() and a.created_at >= cutoff for a in self.articles
        )

    async def insert_article(self, draft: ArticleDraft) -> ArticleRecord:
        now = self.clock()
        record = ArticleRecord(
            id=self._next_id,
            **draft.model_dump(),
            created_at=now,
            published_at=now if draft.status == ArticleStatus.PUBLISHED else None,
        )
        self.articles.append(record)
        self._next_id += 1
        return record

    async def mark_published(self, article_id, published_at=None) -> ArticleRecord:
        for index, article in enumerate(self.articles):
            if article.id == article_id:
                self.articles[index] = article.model_copy(
                    update={
                        "status": ArticleStatus.PUBLISHED,
                        "published_at": published_at or self.clock(),
                    }
                )
                return self.articles[index]
        raise LookupError(article_id)

    async def delete_article(self, article_id) -> None:
        self.articles = [a for a in self.articles if a.id != article_id]

    async def list_published(self, limit) -> list[ArticleRecord]:
        published = [a for a in self.articles if a.status == ArticleStatus.PUBLISHED]
        return list(reversed(published))[:limit]

    async def get_stats(self) -> StoreStats:
        return StoreStats(total_articles=len(self.articles))


class FakeNewsProvider:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.empty: set[str] = set()

    async def fetch_news_for_keyword(self, keyword) -> NewsContext:
        self.calls.append(keyword)
        if keyword in self.empty:
            return NewsContext(keyword=keyword)
        return NewsContext(
            keyword=keyword,
            articles=[
                NewsArticle(
                    title=f"{keyword} 관련 보도",
                    link=f"https://news.example.com/{len(self.calls)}",
                    source="google_news",
                )
            ],
        )


class FakeArticleGenerator:
    """Generator with per-keyword failures, delays, and an optional gate."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}
        self.started = asyncio.Event()
        self.release: asyncio.Event | None = None

    async def generate(self, keyword, news) -> GeneratedArticle | None:
        self.calls.append(keyword)
        self.started.set()
        if self.release is not None:
            await self.release.wait()
        if keyword in self.delays:
            await asyncio.sleep(self.delays[keyword])
        if keyword in self.failures:
            raise self.failures[keyword]
        if news.is_empty:
            return None
        return GeneratedArticle(
            keyword=keyword,
            title=f"{keyword} 최신 동향",
            summary="요약",
            content="## 주요 내용\n\n본문",
            slug=f"article-{len(self.calls)}",
            source_urls=news.source_urls,
        )


class RecordingPublisher:
    def __init__(self) -> None:
        self.published: list[tuple[ArticleRecord, list[str]]] = []
        self.index_refreshes: list[tuple[list[ArticleRecord], list[str]]] = []
        self.refresh_error: Exception | None = None
        self.publish_error: Exception | None = None

    async def publish(self, article, trend_keywords) -> None:
        if self.publish_error is not None:
            raise self.publish_error
        self.published.append((article, trend_keywords))

    async def refresh_index(self, articles, trend_keywords) -> None:
        if self.refresh_error is not None:
            raise self.refresh_error
        self.index_refreshes.append((articles, trend_keywords))


@pytest.fixture
def keyword_store(clock) -> InMemoryKeywordStore:
    return InMemoryKeywordStore(clock)


@pytest.fixture
def article_store(clock) -> InMemoryArticleStore:
    return InMemoryArticleStore(clock)


@pytest.fixture
def news_provider() -> FakeNewsProvider:
    return FakeNewsProvider()


@pytest.fixture
def article_generator() -> FakeArticleGenerator:
    return FakeArticleGenerator()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def sleep() -> AsyncMock:
    """Recorded no-op replacement for asyncio.sleep."""
    return AsyncMock()


@pytest.fixture
def make_source():
    """Build a StaticSource(name, texts, error=None)."""
    return StaticSource


@pytest.fixture
def make_pipeline(
    clock, keyword_store, article_store, news_provider, article_generator, publisher, sleep
):
    """Build a TrendPipeline wired to the in-memory fakes.

    Keyword arguments other than ``sources`` become PipelineConfig fields;
    the inter-item delay defaults to zero.
    """

    def _make(sources: list[BaseTrendSource] | None = None, **config) -> TrendPipeline:
        config.setdefault("inter_item_delay_seconds", 0)
        return TrendPipeline(
            sources=sources or [],
            classifier=KeywordClassifier(),
            keyword_store=keyword_store,
            article_store=article_store,
            news_provider=news_provider,
            article_generator=article_generator,
            publisher=publisher,
            config=PipelineConfig(**config),
            clock=clock,
            sleep=sleep,
        )

    return _make
