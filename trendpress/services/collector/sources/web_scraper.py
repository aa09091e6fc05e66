"""Generic portal scraper base class.

Provides HTML fetching through the shared HTTP client, a CSS selector
fallback chain, and the text cleanup every realtime-ranking widget needs.
Subclasses only supply their config (URLs and selectors) and, when a portal
needs it, a custom ``_parse_page``.
"""

import asyncio
import re

from bs4 import BeautifulSoup, Tag

from trendpress.config.sources import WebScraperConfig
from trendpress.core.exceptions import SourceFetchError
from trendpress.core.logging import get_logger
from trendpress.infrastructure.http_client import HTTPClient
from trendpress.services.collector.base import BaseTrendSource, CandidateKeyword

logger = get_logger(__name__)

# Trend direction badges rendered next to ranking entries
TREND_MARKER = re.compile(
    r"(?:\s+(?:new|up|down|same|동일|상승|하강|하락|신규)|\s*[▲▼━-])\s*$", re.IGNORECASE
)
_WHITESPACE = re.compile(r"\s+")


def element_text(element: Tag) -> str:
    """Visible text of an element, with child strings separated by spaces.

    Rank numbers usually live in their own child span, so joining with a
    space keeps them as a separate token the normalizer can drop.
    """
    return " ".join(element.stripped_strings)


def clean_text(text: str) -> str:
    """Collapse whitespace and drop trailing trend markers."""
    text = _WHITESPACE.sub(" ", text).strip()
    previous = None
    while previous != text:
        previous = text
        text = TREND_MARKER.sub("", text).strip()
    return text


class WebScraperSource(BaseTrendSource):
    """Base class for realtime-ranking portal scrapers.

    Config options:
        urls: Pages to fetch, merged in this order
        selectors: CSS selectors tried in order; first one with results wins
        referer: Optional Referer header
        max_items: Maximum candidates (default: 20)
        max_text_length: Longer texts are layout noise (default: 20)
        request_timeout: HTTP timeout per page (default: 15s)
    """

    config: WebScraperConfig

    def __init__(self, config: WebScraperConfig, http_client: HTTPClient) -> None:
        """Initialize scraper.

        Args:
            config: Typed configuration object
            http_client: Shared HTTP client
        """
        super().__init__(config)
        self.http_client = http_client

    def _get_headers(self) -> dict[str, str]:
        headers = {"User-Agent": self.config.user_agent}
        if self.config.referer:
            headers["Referer"] = self.config.referer
        return headers

    async def _fetch_html(self, url: str) -> str:
        return await self.http_client.get_text(
            url, timeout=self.config.request_timeout, headers=self._get_headers()
        )

    async def _fetch(self) -> list[CandidateKeyword]:
        if not self.config.urls:
            raise SourceFetchError(self.name, "no urls configured")

        pages = await asyncio.gather(
            *(self._fetch_html(url) for url in self.config.urls), return_exceptions=True
        )

        texts: list[str] = []
        seen: set[str] = set()
        failures = 0
        for url, page in zip(self.config.urls, pages, strict=True):
            if isinstance(page, BaseException):
                failures += 1
                logger.warning("Page fetch failed", source=self.name, url=url, error=str(page))
                continue
            soup = BeautifulSoup(page, "html.parser")
            for text in self._parse_page(soup):
                key = text.lower()
                if key in seen:
                    continue
                seen.add(key)
                texts.append(text)
            if len(texts) >= self.config.max_items:
                break

        if failures == len(self.config.urls):
            raise SourceFetchError(self.name, "all pages failed", context={"urls": self.config.urls})

        return self._to_candidates(texts)

    def _parse_page(self, soup: BeautifulSoup) -> list[str]:
        """Extract ranking texts from one page via the selector chain.

        Args:
            soup: Parsed page

        Returns:
            Cleaned texts in display order
        """
        for selector in self.config.selectors:
            texts = [
                text
                for text in (clean_text(element_text(el)) for el in soup.select(selector))
                if self._plausible(text)
            ]
            if texts:
                logger.debug("Selector matched", source=self.name, selector=selector, count=len(texts))
                return texts
        return []

    def _plausible(self, text: str) -> bool:
        return 2 <= len(text) <= self.config.max_text_length


__all__ = ["TREND_MARKER", "WebScraperSource", "clean_text", "element_text"]
