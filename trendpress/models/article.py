"""Article ORM model.

This module defines the Article model for generated trend articles.
"""

import enum
from datetime import datetime

from sqlalchemy import JSON, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trendpress.models.base import Base, IntPKMixin, TimestampMixin, UTCDateTime


class ArticleStatus(str, enum.Enum):
    """Article publication status."""

    DRAFT = "draft"
    PUBLISHED = "published"


class Article(Base, IntPKMixin, TimestampMixin):
    """Generated article for a trending keyword.

    Attributes:
        keyword_id: Keyword row the article was generated for
        keyword: Keyword text (denormalized for lookups)
        title: Article headline
        content: Markdown body
        summary: One or two sentence summary
        source_urls: News URLs used as context
        slug: URL slug, unique
        status: Draft or published
        views: View counter
        image: Optional lead image URL
        published_at: When the article was published
    """

    __tablename__ = "articles"

    keyword_id: Mapped[int | None] = mapped_column(
        ForeignKey("keywords.id", ondelete="SET NULL"), nullable=True
    )
    keyword: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    status: Mapped[ArticleStatus] = mapped_column(
        Enum(ArticleStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ArticleStatus.DRAFT,
    )
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    __table_args__ = (
        Index("ix_articles_status_published_at", "status", "published_at"),
        Index("ix_articles_keyword_created_at", "keyword", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug='{self.slug}', status={self.status.value})>"


__all__ = ["Article", "ArticleStatus"]
