"""Zum realtime issue keywords."""

from typing import Any

from trendpress.config.sources import ZumConfig
from trendpress.services.collector.sources.web_scraper import WebScraperSource


class ZumSource(WebScraperSource):
    """Scrapes the issue keyword widget on the zum.com front page."""

    name = "zum"

    @classmethod
    def build_config(cls, overrides: dict[str, Any]) -> ZumConfig:
        return ZumConfig(**overrides)


__all__ = ["ZumSource"]
