"""News context and article generation configuration."""

from pydantic import BaseModel, Field

from trendpress.core.config import Config


class NewsConfig(BaseModel):
    """News fetcher settings.

    Attributes:
        naver_client_id: Naver search API client id (Naver is skipped if empty)
        naver_client_secret: Naver search API client secret
        request_timeout: Timeout per news source request
        per_source: Hits requested from each news source
        content_articles: Top articles whose body text is fetched
        max_content_length: Body text cap in characters
    """

    naver_client_id: str = ""
    naver_client_secret: str = ""
    naver_api_url: str = "https://openapi.naver.com/v1/search/news.json"
    google_news_url: str = "https://news.google.com/rss/search"
    request_timeout: float = Field(default=15.0, gt=0)
    per_source: int = Field(default=5, ge=1, le=100)
    content_articles: int = Field(default=5, ge=0)
    max_content_length: int = Field(default=5000, ge=100)

    @property
    def naver_enabled(self) -> bool:
        return bool(self.naver_client_id and self.naver_client_secret)

    @classmethod
    def from_settings(cls, config: Config) -> "NewsConfig":
        return cls(
            naver_client_id=config.naver_client_id,
            naver_client_secret=config.naver_client_secret,
            request_timeout=config.news_timeout_seconds,
        )


class GeneratorConfig(BaseModel):
    """LLM article generation settings.

    Attributes:
        model: LiteLLM model id
        temperature: Sampling temperature
        max_tokens: Response token limit
        min_length: Minimum body length for the quality gate
        min_headings: Minimum ``##`` headings for the quality gate
        min_paragraphs: Minimum paragraphs for the quality gate
    """

    model: str = "deepseek/deepseek-chat"
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=256)
    timeout: int = Field(default=120, ge=1)
    min_length: int = Field(default=300, ge=0)
    min_headings: int = Field(default=2, ge=0)
    min_paragraphs: int = Field(default=3, ge=0)

    @classmethod
    def from_settings(cls, config: Config) -> "GeneratorConfig":
        return cls(
            model=config.llm_model,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
        )


__all__ = ["GeneratorConfig", "NewsConfig"]
