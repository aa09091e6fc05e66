"""Unit tests for pipeline, news, and generator configuration."""

import pytest
from pydantic import ValidationError

from trendpress.config.news import GeneratorConfig, NewsConfig
from trendpress.config.pipeline import PipelineConfig
from trendpress.core.config import Config


class TestPipelineConfig:
    """Tests for PipelineConfig model."""

    def test_default_values(self):
        """Test default configuration values."""
        config = PipelineConfig()
        assert config.max_articles_per_hour == 20
        assert config.recency_window_hours == 3.0
        assert config.existing_article_window_hours == 24.0
        assert config.inter_item_delay_seconds == 2.0
        assert config.keyword_timeout_seconds == 180.0
        assert config.auto_publish is True
        assert config.index_article_limit == 50
        assert config.index_keyword_limit == 10
        assert config.trend_window_hours == 6.0

    def test_zero_cap_allowed(self):
        """Test a zero cap is a valid way to pause processing."""
        assert PipelineConfig(max_articles_per_hour=0).max_articles_per_hour == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_articles_per_hour": -1},
            {"recency_window_hours": 0},
            {"inter_item_delay_seconds": -0.5},
            {"keyword_timeout_seconds": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            PipelineConfig(**kwargs)

    def test_from_settings(self):
        """Test values are taken from the application config."""
        settings = Config(
            _env_file=None,
            max_articles_per_hour=5,
            recency_window_hours=1.5,
            auto_publish=False,
        )

        config = PipelineConfig.from_settings(settings)

        assert config.max_articles_per_hour == 5
        assert config.recency_window_hours == 1.5
        assert config.auto_publish is False


class TestNewsConfig:
    """Tests for NewsConfig model."""

    def test_naver_disabled_by_default(self):
        """Test Naver needs both credentials."""
        assert NewsConfig().naver_enabled is False
        assert NewsConfig(naver_client_id="id").naver_enabled is False
        assert NewsConfig(naver_client_id="id", naver_client_secret="s").naver_enabled is True

    def test_from_settings(self):
        """Test credentials and timeout come from the application config."""
        settings = Config(
            _env_file=None,
            naver_client_id="id",
            naver_client_secret="secret",
            news_timeout_seconds=7,
        )

        config = NewsConfig.from_settings(settings)

        assert config.naver_enabled is True
        assert config.request_timeout == 7


class TestGeneratorConfig:
    """Tests for GeneratorConfig model."""

    def test_default_values(self):
        """Test default model and quality gate."""
        config = GeneratorConfig()
        assert config.model == "deepseek/deepseek-chat"
        assert config.min_length == 300
        assert config.min_headings == 2
        assert config.min_paragraphs == 3

    def test_from_settings(self):
        """Test LLM settings come from the application config."""
        settings = Config(_env_file=None, llm_model="openai/gpt-4o-mini", llm_temperature=0.7)

        config = GeneratorConfig.from_settings(settings)

        assert config.model == "openai/gpt-4o-mini"
        assert config.temperature == 0.7
