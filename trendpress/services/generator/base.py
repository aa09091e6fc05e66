"""DTOs for generated articles."""

from pydantic import BaseModel, Field


class GeneratedArticle(BaseModel):
    """Article produced for a keyword.

    Attributes:
        keyword: Keyword the article covers
        title: Headline
        summary: Short summary
        content: Markdown body
        slug: URL slug
        source_urls: News URLs used as context
        tags: Topic tags
        is_fallback: True when assembled from headlines instead of the LLM
    """

    keyword: str
    title: str
    summary: str = ""
    content: str
    slug: str
    source_urls: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    image: str | None = None
    is_fallback: bool = False


__all__ = ["GeneratedArticle"]
