"""Typed configuration models for services."""

from trendpress.config.filtering import QualityFilterConfig
from trendpress.config.news import GeneratorConfig, NewsConfig
from trendpress.config.pipeline import PipelineConfig
from trendpress.config.sources import (
    GoogleTrendsRSSConfig,
    NateConfig,
    SignalConfig,
    SourceConfig,
    WebScraperConfig,
    ZumConfig,
)

__all__ = [
    "GeneratorConfig",
    "GoogleTrendsRSSConfig",
    "NateConfig",
    "NewsConfig",
    "PipelineConfig",
    "QualityFilterConfig",
    "SignalConfig",
    "SourceConfig",
    "WebScraperConfig",
    "ZumConfig",
]
