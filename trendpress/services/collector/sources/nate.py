"""Nate realtime search ranking."""

from typing import Any

from trendpress.config.sources import NateConfig
from trendpress.services.collector.sources.web_scraper import WebScraperSource


class NateSource(WebScraperSource):
    """Scrapes the realtime search ranking on nate.com.

    ``span.txt_rank`` holds the bare keyword; the fallback selectors point at
    list items that also carry rank numbers and trend badges.
    """

    name = "nate"

    @classmethod
    def build_config(cls, overrides: dict[str, Any]) -> NateConfig:
        return NateConfig(**overrides)


__all__ = ["NateSource"]
