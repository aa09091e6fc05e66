"""Google Trends daily trending searches via RSS.

The public trending RSS feed lists the day's rising searches for one
country, optionally narrowed to a category ("e" = entertainment).
"""

from typing import Any

import feedparser

from trendpress.config.sources import GoogleTrendsRSSConfig
from trendpress.core.exceptions import SourceFetchError
from trendpress.core.logging import get_logger
from trendpress.infrastructure.http_client import HTTPClient
from trendpress.services.collector.base import BaseTrendSource, CandidateKeyword

logger = get_logger(__name__)


class GoogleTrendsSource(BaseTrendSource):
    """Google Trends RSS source (general trends)."""

    name = "google_trends"
    config: GoogleTrendsRSSConfig

    def __init__(self, config: GoogleTrendsRSSConfig, http_client: HTTPClient) -> None:
        super().__init__(config)
        self.http_client = http_client

    @classmethod
    def build_config(cls, overrides: dict[str, Any]) -> GoogleTrendsRSSConfig:
        return GoogleTrendsRSSConfig(**overrides)

    def _params(self) -> dict[str, str]:
        params = {"geo": self.config.geo}
        if self.config.category:
            params["category"] = self.config.category
        return params

    async def _fetch(self) -> list[CandidateKeyword]:
        content = await self.http_client.get_text(
            self.config.feed_url,
            timeout=self.config.request_timeout,
            headers={"User-Agent": self.config.user_agent},
            params=self._params(),
        )
        feed = feedparser.parse(content)

        if feed.bozo and not feed.entries:
            raise SourceFetchError(
                self.name,
                f"unparseable feed: {feed.get('bozo_exception')}",
                context={"feed_url": self.config.feed_url},
            )
        if feed.bozo:
            logger.warning(
                "Feed parsing had issues",
                source=self.name,
                error=str(feed.get("bozo_exception")),
            )

        titles = [
            title
            for title in ((entry.get("title") or "").strip() for entry in feed.entries)
            if 2 <= len(title) <= self.config.max_text_length
        ]
        return self._to_candidates(titles)


class GoogleTrendsEntertainmentSource(GoogleTrendsSource):
    """Google Trends RSS source, entertainment category."""

    name = "google_trends_ent"

    @classmethod
    def build_config(cls, overrides: dict[str, Any]) -> GoogleTrendsRSSConfig:
        return GoogleTrendsRSSConfig(**{"category": "e", **overrides})


__all__ = ["GoogleTrendsEntertainmentSource", "GoogleTrendsSource"]
