"""Application configuration using Pydantic Settings.

This module defines all application configuration loaded from environment variables.
Configuration is validated at startup and provides type-safe access throughout the app.
"""

from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ASYNC_DRIVERS = ("sqlite+aiosqlite://", "postgresql+asyncpg://")

DEFAULT_SOURCES = ["google_trends", "google_trends_ent", "zum", "nate", "signal"]


class Config(BaseSettings):
    """Application configuration.

    All configuration is loaded from environment variables or .env file.
    Validation happens automatically via Pydantic.

    Example:
        >>> config = Config()
        >>> print(config.app_name)
        'TrendPress'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = Field(default="TrendPress", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # ============================================
    # Database Settings
    # ============================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/trendpress.db",
        description="Async database connection URL",
    )
    database_echo: bool = Field(default=False, description="Echo SQL queries")

    # ============================================
    # Pipeline Settings
    # ============================================
    crawl_interval_minutes: int = Field(
        default=3, description="Minutes between scheduled pipeline runs", ge=1, le=1440
    )
    max_articles_per_hour: int = Field(
        default=20, description="Keywords processed into articles per rolling hour", ge=0
    )
    recency_window_hours: float = Field(
        default=3.0, description="Lookback window for keyword re-insertion", gt=0
    )
    existing_article_window_hours: float = Field(
        default=24.0, description="Skip keywords that already got an article in this window", gt=0
    )
    inter_item_delay_seconds: float = Field(
        default=2.0, description="Pause after each processed keyword", ge=0
    )
    keyword_timeout_seconds: float = Field(
        default=180.0, description="Upper bound for one keyword's news+article+publish", gt=0
    )
    auto_publish: bool = Field(default=True, description="Publish generated articles immediately")
    scheduler_enabled: bool = Field(default=True, description="Start the periodic scheduler")

    # ============================================
    # Keyword Quality Filter
    # ============================================
    keyword_min_length: int = Field(default=2, description="Minimum keyword length", ge=1)
    keyword_max_length: int = Field(default=15, description="Maximum keyword length", ge=2)
    short_acronym_max_length: int = Field(
        default=3, description="Latin-only terms up to this length are rejected", ge=0
    )
    keyword_extra_stopwords: Annotated[list[str], NoDecode] = Field(
        default_factory=list, description="Added to the built-in stopword set"
    )
    keyword_allowed_terms: Annotated[list[str], NoDecode] = Field(
        default_factory=list, description="Never treated as stopwords or short acronyms"
    )

    # ============================================
    # Trend Sources
    # ============================================
    enabled_sources: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_SOURCES),
        description="Source adapters in registration order",
    )

    # ============================================
    # News Collection
    # ============================================
    naver_client_id: str = Field(default="", description="Naver search API client id")
    naver_client_secret: str = Field(default="", description="Naver search API client secret")
    news_timeout_seconds: float = Field(
        default=15.0, description="Timeout for one news source request", gt=0
    )

    # ============================================
    # LLM (LiteLLM format: provider/model-name)
    # ============================================
    llm_model: str = Field(
        default="deepseek/deepseek-chat", description="LLM model for article generation"
    )
    llm_api_key: str = Field(default="", description="API key passed to LiteLLM")
    llm_api_base: str = Field(default="", description="Optional custom API base URL")
    llm_temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=4096, ge=256, le=16000)

    # ============================================
    # Publishing
    # ============================================
    site_title: str = Field(default="트렌드 뉴스", description="Site title used in the index")
    site_url: str = Field(default="http://localhost:8000", description="Public site URL")
    output_dir: str = Field(default="./public", description="Directory for published files")

    # ============================================
    # API Server
    # ============================================
    api_host: str = Field(default="0.0.0.0", description="API bind host")
    api_port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Ensure database URL uses an async driver.

        Args:
            v: Database URL string

        Returns:
            Validated database URL

        Raises:
            ValueError: If URL doesn't use a supported async driver
        """
        if isinstance(v, str) and not v.startswith(ASYNC_DRIVERS):
            raise ValueError(
                "database_url must use an async driver "
                "(sqlite+aiosqlite:// or postgresql+asyncpg://)"
            )
        return v

    @field_validator(
        "enabled_sources", "keyword_extra_stopwords", "keyword_allowed_terms", mode="before"
    )
    @classmethod
    def split_comma_list(cls, v: object) -> object:
        """Accept a comma separated string from the environment."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode.

        Returns:
            True if app_env is 'development'
        """
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if app_env is 'production'
        """
        return self.app_env == "production"

    @property
    def naver_enabled(self) -> bool:
        """Whether Naver news search credentials are configured."""
        return bool(self.naver_client_id and self.naver_client_secret)


# =============================================================================
# Singleton accessor
# =============================================================================

_config: Config | None = None


def get_config() -> Config:
    """Get the global Config singleton.

    Returns:
        The global Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


__all__ = ["Config", "DEFAULT_SOURCES", "get_config"]
