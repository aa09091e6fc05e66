"""LLM article generator.

Turns a keyword and its news context into a Korean news article via
LiteLLM. The model answers in a fixed ``TITLE:/SUMMARY:/TAGS:/CONTENT:``
layout; the body then goes through style cleanup and a quality gate. Any
LLM failure or a failed gate falls back to an article assembled from the
headlines, so a keyword with news always yields an article.
"""

import re
import string
from dataclasses import dataclass, field
from datetime import datetime

from trendpress.config.news import GeneratorConfig
from trendpress.core.exceptions import ArticleGenerationError
from trendpress.core.logging import get_logger
from trendpress.core.types import Clock, utc_now
from trendpress.infrastructure.llm import LLMClient, LLMConfig
from trendpress.services.generator.base import GeneratedArticle
from trendpress.services.generator.fallback import (
    compose_fallback_article,
    default_summary,
    default_title,
)
from trendpress.services.generator.prompts import build_messages
from trendpress.services.news.base import NewsContext

logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
_SLUG_STRIP = re.compile(r"[^\w\s가-힣]")
_FIELD = {
    name: re.compile(rf"^{name}:[ \t]*(.+?)[ \t]*$", re.MULTILINE)
    for name in ("TITLE", "SUMMARY", "TAGS")
}
_CONTENT = re.compile(r"CONTENT:\s*(.+)", re.DOTALL)
_HEADING = re.compile(r"^##\s", re.MULTILINE)
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")

# Blog-register endings rewritten into news register
STYLE_REPLACEMENTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"에 대해 알아보겠습니다[.!]?"), "에 대해 짚어본다."),
    (re.compile(r"살펴보도록 하겠습니다[.!]?"), "살펴본다."),
    (re.compile(r"알아보도록 하겠습니다[.!]?"), "알아본다."),
    (re.compile(r"\n.*이 (?:기사|글|콘텐츠)는.*(?:AI|인공지능|자동).*생성.*\n?"), "\n"),
    (re.compile(r"\([a-zA-Z0-9]+\.(?:com|net|org|kr|vn|co\.kr)\)"), ""),
    (re.compile(r"\(출처:?\s*[^)]+\)"), ""),
    (re.compile(r"^(#{1,3})\s*\*\*(.+?)\*\*", re.MULTILINE), r"\1 \2"),
    (re.compile(r"\n{4,}"), "\n\n\n"),
)


@dataclass
class ParsedArticle:
    title: str
    summary: str
    content: str
    tags: list[str] = field(default_factory=list)


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_slug(title: str, now: datetime) -> str:
    """URL slug: cleaned title (max 50 chars) plus a base-36 millisecond timestamp.

    "손흥민, 시즌 10호골!" becomes "손흥민-시즌-10호골-<stamp>".
    """
    cleaned = re.sub(r"\s+", "-", _SLUG_STRIP.sub("", title).strip())[:50].strip("-")
    stamp = to_base36(int(now.timestamp() * 1000))
    return f"{cleaned}-{stamp}" if cleaned else stamp


def parse_article_output(output: str, keyword: str) -> ParsedArticle:
    """Parse the ``TITLE:/SUMMARY:/TAGS:/CONTENT:`` response layout.

    Missing fields fall back to keyword-based defaults; a response without a
    CONTENT marker is used as the body with the header lines removed.
    """
    fields = {}
    for name, pattern in _FIELD.items():
        match = pattern.search(output)
        fields[name] = match.group(1).strip() if match else ""

    match = _CONTENT.search(output)
    content = match.group(1).strip() if match else ""
    if not content and len(output) > 100:
        content = "\n".join(
            line
            for line in output.splitlines()
            if not line.startswith(("TITLE:", "SUMMARY:", "TAGS:"))
        ).strip()

    title = fields["TITLE"].strip("\"'#").strip() or default_title(keyword)
    if len(title) > 60:
        title = title[:57] + "..."
    summary = fields["SUMMARY"].strip("\"'").strip() or default_summary(keyword)
    tags = [t.strip() for t in fields["TAGS"].split(",") if t.strip()] or [keyword]

    return ParsedArticle(title=title, summary=summary, content=content, tags=tags)


def post_process_content(content: str) -> str:
    for pattern, replacement in STYLE_REPLACEMENTS:
        content = pattern.sub(replacement, content)
    return content.strip()


def quality_issues(content: str, config: GeneratorConfig) -> list[str]:
    """List the quality gate checks the body fails; empty means it passes."""
    issues = []
    if len(content) < config.min_length:
        issues.append(f"too short ({len(content)} < {config.min_length})")
    headings = len(_HEADING.findall(content))
    if headings < config.min_headings:
        issues.append(f"too few headings ({headings} < {config.min_headings})")
    paragraphs = [p for p in _PARAGRAPH_SPLIT.split(content) if len(p.strip()) > 20]
    if len(paragraphs) < config.min_paragraphs:
        issues.append(f"too few paragraphs ({len(paragraphs)} < {config.min_paragraphs})")
    return issues


class LLMArticleGenerator:
    """Article generator backed by an LLM with a headline fallback.

    Attributes:
        llm_client: LiteLLM client wrapper
        config: Model and quality gate settings
        clock: Time source for slugs and datelines
    """

    def __init__(
        self,
        llm_client: LLMClient,
        config: GeneratorConfig | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.llm_client = llm_client
        self.config = config or GeneratorConfig()
        self.clock = clock

    async def generate(self, keyword: str, news: NewsContext) -> GeneratedArticle | None:
        """Write an article for ``keyword``.

        Args:
            keyword: Trending keyword
            news: News gathered for the keyword

        Returns:
            The article, or None when there is no news to write from
        """
        if news.is_empty:
            logger.info("No news for keyword, skipping article", keyword=keyword)
            return None

        now = self.clock()
        try:
            parsed = await self._generate_with_llm(keyword, news, now)
        except Exception as e:
            logger.warning(
                "LLM article generation failed, using fallback",
                keyword=keyword,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._fallback(keyword, news, now)

        issues = quality_issues(parsed.content, self.config)
        if issues:
            logger.warning(
                "Article failed quality gate, using fallback", keyword=keyword, issues=issues
            )
            return self._fallback(keyword, news, now)

        logger.info(
            "Article generated",
            keyword=keyword,
            title=parsed.title,
            length=len(parsed.content),
        )
        return GeneratedArticle(
            keyword=keyword,
            title=parsed.title,
            summary=parsed.summary,
            content=parsed.content,
            slug=generate_slug(parsed.title, now),
            source_urls=news.source_urls,
            tags=parsed.tags,
        )

    async def _generate_with_llm(
        self, keyword: str, news: NewsContext, now: datetime
    ) -> ParsedArticle:
        response = await self.llm_client.complete(
            config=LLMConfig(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                timeout=self.config.timeout,
            ),
            messages=build_messages(keyword, news, now),
        )
        parsed = parse_article_output(response.content, keyword)
        if not parsed.content:
            raise ArticleGenerationError("LLM returned no article body", keyword=keyword)
        parsed.content = post_process_content(parsed.content)
        return parsed

    def _fallback(self, keyword: str, news: NewsContext, now: datetime) -> GeneratedArticle:
        article = compose_fallback_article(keyword, news, now)
        return GeneratedArticle(
            keyword=keyword,
            title=article.title,
            summary=article.summary,
            content=article.content,
            slug=generate_slug(article.title, now),
            source_urls=[u for u in news.source_urls if "news.google.com/rss" not in u],
            tags=article.tags,
            is_fallback=True,
        )


__all__ = [
    "LLMArticleGenerator",
    "ParsedArticle",
    "generate_slug",
    "parse_article_output",
    "post_process_content",
    "quality_issues",
    "to_base36",
]
