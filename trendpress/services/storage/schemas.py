"""Read models and result types for the keyword and article stores."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from trendpress.models.article import ArticleStatus


class KeywordRecord(BaseModel):
    """Persisted keyword as seen by the pipeline."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    keyword: str
    source: str
    rank: int | None = None
    detected_at: datetime
    processed: bool = False


class InsertStatus(str, Enum):
    """Outcome of a keyword insert attempt."""

    INSERTED = "inserted"
    DUPLICATE = "duplicate"
    FAILED = "failed"


class InsertResult(BaseModel):
    """Result of a keyword insert attempt.

    Attributes:
        status: Inserted, skipped as a recent duplicate, or write failure
        record: The new record when inserted
        error: Error message on write failure
    """

    status: InsertStatus
    record: KeywordRecord | None = None
    error: str | None = None

    @property
    def is_new(self) -> bool:
        return self.status == InsertStatus.INSERTED


class ArticleDraft(BaseModel):
    """Article values handed to ``ArticleStore.insert_article``."""

    keyword_id: int | None = None
    keyword: str
    title: str
    summary: str | None = None
    content: str
    slug: str
    source_urls: list[str] = Field(default_factory=list)
    image: str | None = None
    status: ArticleStatus = ArticleStatus.DRAFT


class ArticleRecord(BaseModel):
    """Persisted article."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    keyword_id: int | None = None
    keyword: str
    title: str
    summary: str | None = None
    content: str
    slug: str
    source_urls: list[str] = Field(default_factory=list)
    image: str | None = None
    status: ArticleStatus
    views: int = 0
    created_at: datetime
    published_at: datetime | None = None


class CrawlLogRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    source: str
    keywords_found: int
    new_keywords: int
    crawled_at: datetime


class StoreStats(BaseModel):
    """Aggregate counters shown on /stats and in the published index."""

    total_keywords: int = 0
    total_articles: int = 0
    published_articles: int = 0
    today_articles: int = 0
    total_views: int = 0
    recent_crawls: list[CrawlLogRecord] = Field(default_factory=list)


__all__ = [
    "ArticleDraft",
    "ArticleRecord",
    "CrawlLogRecord",
    "InsertResult",
    "InsertStatus",
    "KeywordRecord",
    "StoreStats",
]
