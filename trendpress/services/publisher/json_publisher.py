"""JSON file publisher.

Writes each published article to ``<output_dir>/articles/<slug>.json`` and
keeps ``<output_dir>/index.json`` current with the latest articles and
trending keywords. Files are written to a temp name and then renamed, so
readers never see a half-written document.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Any

from trendpress.core.exceptions import PublishError
from trendpress.core.logging import get_logger
from trendpress.core.types import Clock, utc_now
from trendpress.services.storage.schemas import ArticleRecord

logger = get_logger(__name__)

SUMMARY_FIELDS = {"id", "keyword", "title", "summary", "slug", "image", "views", "published_at"}


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    os.replace(tmp, path)


class JSONPublisher:
    """Publish articles and the site index as JSON documents.

    Attributes:
        output_dir: Root directory for published files
        site_title: Site title stored in the index
        site_url: Public base URL used for article links
    """

    def __init__(
        self,
        output_dir: str | Path,
        site_title: str,
        site_url: str,
        clock: Clock = utc_now,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.site_title = site_title
        self.site_url = site_url.rstrip("/")
        self.clock = clock

    def article_path(self, slug: str) -> Path:
        return self.output_dir / "articles" / f"{slug}.json"

    @property
    def index_path(self) -> Path:
        return self.output_dir / "index.json"

    def article_url(self, slug: str) -> str:
        return f"{self.site_url}/articles/{slug}"

    async def publish(self, article: ArticleRecord, trend_keywords: list[str]) -> None:
        """Write one article document.

        Raises:
            PublishError: If the file cannot be written
        """
        payload = {
            **article.model_dump(mode="json"),
            "url": self.article_url(article.slug),
            "site_title": self.site_title,
            "trend_keywords": trend_keywords,
        }
        path = self.article_path(article.slug)
        try:
            await asyncio.to_thread(_write_json, path, payload)
        except OSError as e:
            raise PublishError(f"Failed to write article: {e}", path=str(path)) from e

        logger.info("Article published", slug=article.slug, path=str(path))

    async def refresh_index(self, articles: list[ArticleRecord], trend_keywords: list[str]) -> None:
        """Rewrite the index with the given articles and trend keywords.

        Raises:
            PublishError: If the file cannot be written
        """
        payload = {
            "site_title": self.site_title,
            "site_url": self.site_url,
            "generated_at": self.clock().isoformat(),
            "trend_keywords": trend_keywords,
            "articles": [
                {
                    **article.model_dump(mode="json", include=SUMMARY_FIELDS),
                    "url": self.article_url(article.slug),
                }
                for article in articles
            ],
        }
        try:
            await asyncio.to_thread(_write_json, self.index_path, payload)
        except OSError as e:
            raise PublishError(f"Failed to write index: {e}", path=str(self.index_path)) from e

        logger.debug("Index written", path=str(self.index_path), articles=len(articles))


__all__ = ["JSONPublisher"]
