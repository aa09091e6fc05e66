"""DTOs for news context gathered per keyword."""

from datetime import datetime

from pydantic import BaseModel, Field


class NewsArticle(BaseModel):
    """One news search hit.

    Attributes:
        title: Headline with markup removed
        description: Snippet with markup removed
        link: Article URL
        pub_date: Publication time when the source reports one
        source: "naver" or "google_news"
        content: Body text, only filled for top articles
    """

    title: str
    description: str = ""
    link: str = ""
    pub_date: datetime | None = None
    source: str
    content: str | None = None


class NewsContext(BaseModel):
    """News gathered for one keyword.

    An empty context (no articles) is a valid result, never an error.
    """

    keyword: str
    articles: list[NewsArticle] = Field(default_factory=list)
    top_articles_with_content: list[NewsArticle] = Field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.articles)

    @property
    def is_empty(self) -> bool:
        return not self.articles

    @property
    def source_urls(self) -> list[str]:
        return [a.link for a in self.articles if a.link]


__all__ = ["NewsArticle", "NewsContext"]
