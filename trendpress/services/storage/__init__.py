"""Keyword and article persistence."""

from trendpress.services.storage.article_store import SQLArticleStore
from trendpress.services.storage.keyword_store import SQLKeywordStore
from trendpress.services.storage.schemas import (
    ArticleDraft,
    ArticleRecord,
    CrawlLogRecord,
    InsertResult,
    InsertStatus,
    KeywordRecord,
    StoreStats,
)

__all__ = [
    "ArticleDraft",
    "ArticleRecord",
    "CrawlLogRecord",
    "InsertResult",
    "InsertStatus",
    "KeywordRecord",
    "SQLArticleStore",
    "SQLKeywordStore",
    "StoreStats",
]
