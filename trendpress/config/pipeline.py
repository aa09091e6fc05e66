"""Pipeline orchestration configuration."""

from pydantic import BaseModel, Field

from trendpress.core.config import Config


class PipelineConfig(BaseModel):
    """Runtime knobs for one TrendPipeline instance.

    Attributes:
        max_articles_per_hour: Rate window cap
        recency_window_hours: Keyword re-insertion lookback
        existing_article_window_hours: Skip keywords with an article this recent
        inter_item_delay_seconds: Pause after each delegated keyword
        keyword_timeout_seconds: Deadline for one keyword's news+article+publish
        auto_publish: Store articles as published and push them to the publisher
        index_article_limit: Published articles passed to the index refresh
        index_keyword_limit: Trend keywords passed to the index refresh
        trend_window_hours: Lookback for the index's trend keywords
    """

    max_articles_per_hour: int = Field(default=20, ge=0)
    recency_window_hours: float = Field(default=3.0, gt=0)
    existing_article_window_hours: float = Field(default=24.0, gt=0)
    inter_item_delay_seconds: float = Field(default=2.0, ge=0)
    keyword_timeout_seconds: float = Field(default=180.0, gt=0)
    auto_publish: bool = True
    index_article_limit: int = Field(default=50, ge=1)
    index_keyword_limit: int = Field(default=10, ge=1)
    trend_window_hours: float = Field(default=6.0, gt=0)

    @classmethod
    def from_settings(cls, config: Config) -> "PipelineConfig":
        """Build from the environment-backed application config."""
        return cls(
            max_articles_per_hour=config.max_articles_per_hour,
            recency_window_hours=config.recency_window_hours,
            existing_article_window_hours=config.existing_article_window_hours,
            inter_item_delay_seconds=config.inter_item_delay_seconds,
            keyword_timeout_seconds=config.keyword_timeout_seconds,
            auto_publish=config.auto_publish,
        )


__all__ = ["PipelineConfig"]
