"""SQLAlchemy ORM models.

- Keyword: accepted trending terms awaiting or done with processing
- CrawlLog: one row per collection pass
- Article: generated articles, draft or published
"""

from trendpress.models.article import Article, ArticleStatus
from trendpress.models.base import Base, IntPKMixin, TimestampMixin, UTCDateTime
from trendpress.models.keyword import CrawlLog, Keyword

__all__ = [
    "Base",
    "IntPKMixin",
    "TimestampMixin",
    "UTCDateTime",
    "Keyword",
    "CrawlLog",
    "Article",
    "ArticleStatus",
]
