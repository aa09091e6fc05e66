"""Signal.bz aggregated realtime keywords.

Signal.bz merges the ranking lists of several portals. Both the front page
and the news page are fetched; the front page ranks first.
"""

from typing import Any

from trendpress.config.sources import SignalConfig
from trendpress.services.collector.sources.web_scraper import WebScraperSource


class SignalSource(WebScraperSource):
    """Scrapes signal.bz ranking pages."""

    name = "signal"

    @classmethod
    def build_config(cls, overrides: dict[str, Any]) -> SignalConfig:
        return SignalConfig(**overrides)


__all__ = ["SignalSource"]
