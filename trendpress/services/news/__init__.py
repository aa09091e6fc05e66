"""News context gathering for article generation."""

from trendpress.services.news.base import NewsArticle, NewsContext
from trendpress.services.news.fetcher import NewsFetcher

__all__ = ["NewsArticle", "NewsContext", "NewsFetcher"]
