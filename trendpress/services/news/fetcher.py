"""News context fetcher.

Gathers recent coverage of a keyword from the Naver news search API (when
credentials are configured) and Google News RSS, in parallel, then pulls
body text for the top hits so the article generator has real material.
"""

import asyncio
import re
from datetime import datetime
from email.utils import parsedate_to_datetime

import feedparser
import httpx
from bs4 import BeautifulSoup

from trendpress.config.news import NewsConfig
from trendpress.core.exceptions import ExternalAPIError
from trendpress.core.logging import get_logger
from trendpress.infrastructure.http_client import HTTPClient
from trendpress.services.news.base import NewsArticle, NewsContext

logger = get_logger(__name__)

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")

# Article body containers, most specific first
CONTENT_SELECTORS: tuple[str, ...] = (
    "#newsct_article",
    "#articleBodyContents",
    "#articeBody",
    ".news_end",
    ".article_body",
    "#article-body",
    ".article-body",
    ".article_txt",
    "#content_body",
    ".view_cont",
    ".news_body",
    "[itemprop='articleBody']",
    "article",
    ".entry-content",
    ".post-content",
    "#content",
)
NOISE_SELECTORS = "script, style, iframe, .ad, .advertisement, .banner, .social-share"
MIN_CONTENT_LENGTH = 100
MIN_PARAGRAPH_LENGTH = 20


def strip_tags(text: str) -> str:
    """Remove markup and entities left in API snippets."""
    text = _TAG.sub("", text or "")
    text = BeautifulSoup(text, "html.parser").get_text()
    return _WHITESPACE.sub(" ", text).strip()


def title_key(title: str) -> str:
    """Dedup key for a headline: lowercase, whitespace removed."""
    return _WHITESPACE.sub("", title).lower()


def parse_pub_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def truncate_content(text: str, limit: int) -> str:
    """Cap body text, preferring to cut after a sentence-final '다.'."""
    if len(text) <= limit:
        return text
    truncated = text[:limit]
    last_sentence = truncated.rfind("다.")
    if last_sentence > limit * 0.6:
        truncated = truncated[: last_sentence + 2]
    return truncated


def extract_content(html: str) -> str:
    """Pull readable body text out of a news page.

    Tries the known article containers first and falls back to joining
    every reasonably long paragraph.
    """
    soup = BeautifulSoup(html, "html.parser")
    content = ""
    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        for noise in element.select(NOISE_SELECTORS):
            noise.decompose()
        content = _WHITESPACE.sub(" ", element.get_text(" ")).strip()
        if len(content) > MIN_CONTENT_LENGTH:
            return content

    paragraphs = [
        text
        for text in (_WHITESPACE.sub(" ", p.get_text(" ")).strip() for p in soup.find_all("p"))
        if len(text) > MIN_PARAGRAPH_LENGTH
    ]
    return "\n\n".join(paragraphs) if paragraphs else content


class NewsFetcher:
    """Collect news context for a keyword.

    ``fetch_news_for_keyword`` never raises: a failing source contributes
    nothing, and total failure yields an empty context.

    Example:
        fetcher = NewsFetcher(http_client, NewsConfig())
        news = await fetcher.fetch_news_for_keyword("손흥민")
        print(news.total_count)
    """

    def __init__(self, http_client: HTTPClient, config: NewsConfig | None = None) -> None:
        self.http_client = http_client
        self.config = config or NewsConfig()

    async def fetch_news_for_keyword(self, keyword: str) -> NewsContext:
        """Gather deduplicated news hits and top-article bodies.

        Args:
            keyword: Trending keyword

        Returns:
            NewsContext, empty when nothing was found
        """
        try:
            return await self._fetch(keyword)
        except Exception as e:
            logger.error("News fetch failed", keyword=keyword, error=str(e), exc_info=True)
            return NewsContext(keyword=keyword)

    async def _fetch(self, keyword: str) -> NewsContext:
        results = await asyncio.gather(
            self.fetch_naver(keyword),
            self.fetch_google_news(keyword),
            return_exceptions=True,
        )

        articles: list[NewsArticle] = []
        seen: set[str] = set()
        for source, result in zip(("naver", "google_news"), results, strict=True):
            if isinstance(result, BaseException):
                logger.warning("News source failed", source=source, keyword=keyword, error=str(result))
                continue
            for article in result:
                key = title_key(article.title)
                if not key or key in seen:
                    continue
                seen.add(key)
                articles.append(article)

        top = articles[: self.config.content_articles]
        bodies = await asyncio.gather(
            *(self.fetch_article_content(a.link) for a in top), return_exceptions=True
        )
        with_content = []
        for article, body in zip(top, bodies, strict=True):
            if isinstance(body, str) and body:
                article = article.model_copy(update={"content": body})
            with_content.append(article)

        logger.info(
            "News collected",
            keyword=keyword,
            total=len(articles),
            with_content=sum(1 for a in with_content if a.content),
        )
        return NewsContext(
            keyword=keyword, articles=articles, top_articles_with_content=with_content
        )

    async def fetch_naver(self, keyword: str) -> list[NewsArticle]:
        """Search Naver news, newest first. Empty when not configured."""
        if not self.config.naver_enabled:
            logger.debug("Naver credentials not configured, skipping")
            return []

        try:
            data = await self.http_client.get_json(
                self.config.naver_api_url,
                timeout=self.config.request_timeout,
                headers={
                    "X-Naver-Client-Id": self.config.naver_client_id,
                    "X-Naver-Client-Secret": self.config.naver_client_secret,
                },
                params={"query": keyword, "display": self.config.per_source, "sort": "date"},
            )
        except httpx.HTTPStatusError as e:
            raise ExternalAPIError(
                "naver",
                "news search failed",
                status_code=e.response.status_code,
                endpoint=self.config.naver_api_url,
                response_body=e.response.text,
            ) from e
        articles = [
            NewsArticle(
                title=strip_tags(item.get("title", "")),
                description=strip_tags(item.get("description", "")),
                link=item.get("originallink") or item.get("link") or "",
                pub_date=parse_pub_date(item.get("pubDate")),
                source="naver",
            )
            for item in (data or {}).get("items", [])
        ]
        logger.debug("Naver news fetched", keyword=keyword, count=len(articles))
        return articles

    async def fetch_google_news(self, keyword: str) -> list[NewsArticle]:
        """Search Google News RSS in the Korean edition."""
        content = await self.http_client.get_text(
            self.config.google_news_url,
            timeout=self.config.request_timeout,
            params={"q": keyword, "hl": "ko", "gl": "KR", "ceid": "KR:ko"},
        )
        feed = feedparser.parse(content)
        if feed.bozo and not feed.entries:
            logger.warning(
                "Google News feed unparseable",
                keyword=keyword,
                error=str(feed.get("bozo_exception")),
            )
            return []

        articles = [
            NewsArticle(
                title=(entry.get("title") or "").strip(),
                description=strip_tags(entry.get("summary", "")),
                link=entry.get("link", ""),
                pub_date=parse_pub_date(entry.get("published")),
                source="google_news",
            )
            for entry in feed.entries[: self.config.per_source]
        ]
        logger.debug("Google News fetched", keyword=keyword, count=len(articles))
        return articles

    async def fetch_article_content(self, url: str) -> str:
        """Fetch and extract one article body. Empty string on failure."""
        if not url:
            return ""
        try:
            html = await self.http_client.get_text(url, timeout=self.config.request_timeout)
        except Exception as e:
            logger.debug("Article body fetch failed", url=url, error=str(e))
            return ""
        return truncate_content(extract_content(html), self.config.max_content_length)


__all__ = [
    "CONTENT_SELECTORS",
    "NewsFetcher",
    "extract_content",
    "parse_pub_date",
    "strip_tags",
    "title_key",
    "truncate_content",
]
