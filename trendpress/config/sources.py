"""Trend source configuration models.

Defines default settings for each source adapter. Selector lists are tried
in order; the first selector that yields any text wins.
"""

from pydantic import BaseModel, Field

from trendpress.infrastructure.http_client import DEFAULT_USER_AGENT


class SourceConfig(BaseModel):
    """Settings shared by every trend source.

    Attributes:
        enabled: Whether the source is registered
        request_timeout: HTTP request timeout in seconds
        max_items: Maximum candidates taken from the source
        max_text_length: Texts longer than this are treated as page noise
        user_agent: User-Agent header for requests
    """

    enabled: bool = True
    request_timeout: float = Field(default=15.0, ge=1.0, le=60.0)
    max_items: int = Field(default=20, ge=1, le=100)
    max_text_length: int = Field(default=20, ge=2, le=100)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)


class GoogleTrendsRSSConfig(SourceConfig):
    """Google Trends daily trending RSS feed.

    Attributes:
        feed_url: RSS endpoint
        geo: Country code
        category: Optional category filter ("e" = entertainment)
    """

    feed_url: str = Field(default="https://trends.google.com/trending/rss")
    geo: str = Field(default="KR", min_length=2, max_length=2)
    category: str | None = None


class WebScraperConfig(SourceConfig):
    """Generic portal scraper configuration.

    Attributes:
        urls: Pages fetched for this source, in priority order
        selectors: CSS selectors tried in order per page
        referer: Optional Referer header
    """

    urls: list[str] = Field(default_factory=list)
    selectors: list[str] = Field(default_factory=list)
    referer: str | None = None


class ZumConfig(WebScraperConfig):
    """Zum realtime issue keywords."""

    urls: list[str] = Field(default_factory=lambda: ["https://zum.com/"])
    selectors: list[str] = Field(
        default_factory=lambda: [
            ".keyword_list li a",
            ".realtime_keyword a",
            ".issue_keyword a",
            ".hot_keyword_list a",
            '[class*="keyword"] a',
            '[class*="search"] li a',
        ]
    )


class NateConfig(WebScraperConfig):
    """Nate realtime search ranking."""

    urls: list[str] = Field(default_factory=lambda: ["https://www.nate.com/"])
    selectors: list[str] = Field(
        default_factory=lambda: [
            "span.txt_rank",
            "ol.isKeywordList li a",
            ".isKeyword a",
            ".kwd_list li a",
            ".keyword_area li a",
            ".realtime_list li a",
            '[class*="rank"] li a',
        ]
    )


class SignalConfig(WebScraperConfig):
    """Signal.bz aggregated realtime keywords."""

    urls: list[str] = Field(
        default_factory=lambda: ["https://signal.bz/", "https://signal.bz/news"]
    )
    selectors: list[str] = Field(
        default_factory=lambda: [
            ".rank-text",
            ".keyword-text",
            "a.rank-name",
            ".list-group-item",
            "ol li a",
            ".home-rank a",
            '[class*="keyword"] a',
            '[class*="rank"] span',
            '[class*="trend"] a',
            "td a",
        ]
    )
    referer: str | None = "https://signal.bz/"
    max_items: int = Field(default=10, ge=1, le=100)


__all__ = [
    "GoogleTrendsRSSConfig",
    "NateConfig",
    "SignalConfig",
    "SourceConfig",
    "WebScraperConfig",
    "ZumConfig",
]
