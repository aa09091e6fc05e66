"""Trend source adapters.

Feed Sources:
- GoogleTrends: daily trending searches RSS (general and entertainment)

Scraper Sources:
- WebScraperSource: base class for realtime-ranking widgets
- Zum: zum.com issue keywords
- Nate: nate.com realtime search ranking
- Signal: signal.bz aggregated ranking
"""

from trendpress.services.collector.sources.factory import (
    SOURCE_CLASSES,
    create_source,
    create_sources,
    get_all_source_names,
    get_source_class,
)
from trendpress.services.collector.sources.google_trends import (
    GoogleTrendsEntertainmentSource,
    GoogleTrendsSource,
)
from trendpress.services.collector.sources.nate import NateSource
from trendpress.services.collector.sources.signal_bz import SignalSource
from trendpress.services.collector.sources.web_scraper import WebScraperSource
from trendpress.services.collector.sources.zum import ZumSource

__all__ = [
    "GoogleTrendsEntertainmentSource",
    "GoogleTrendsSource",
    "NateSource",
    "SOURCE_CLASSES",
    "SignalSource",
    "WebScraperSource",
    "ZumSource",
    "create_source",
    "create_sources",
    "get_all_source_names",
    "get_source_class",
]
