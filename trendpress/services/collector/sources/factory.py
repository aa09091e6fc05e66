"""Source factory for config-driven source instantiation."""

from typing import Any

from trendpress.core.logging import get_logger
from trendpress.infrastructure.http_client import HTTPClient
from trendpress.services.collector.base import BaseTrendSource
from trendpress.services.collector.sources.google_trends import (
    GoogleTrendsEntertainmentSource,
    GoogleTrendsSource,
)
from trendpress.services.collector.sources.nate import NateSource
from trendpress.services.collector.sources.signal_bz import SignalSource
from trendpress.services.collector.sources.zum import ZumSource

logger = get_logger(__name__)

# Source name to class mapping, in default registration order
SOURCE_CLASSES: dict[str, type[BaseTrendSource]] = {
    "google_trends": GoogleTrendsSource,
    "google_trends_ent": GoogleTrendsEntertainmentSource,
    "zum": ZumSource,
    "nate": NateSource,
    "signal": SignalSource,
}


def get_source_class(source_name: str) -> type[BaseTrendSource] | None:
    """Get the source class for a given source name.

    Args:
        source_name: Name of the source (e.g., "zum", "google_trends")

    Returns:
        Source class or None if source type is unknown
    """
    return SOURCE_CLASSES.get(source_name)


def create_source(
    source_name: str,
    http_client: HTTPClient,
    overrides: dict[str, Any] | None = None,
) -> BaseTrendSource:
    """Create a trend source from its name and config overrides.

    Args:
        source_name: Name of the source
        http_client: Shared HTTP client
        overrides: Config field overrides

    Returns:
        Source instance

    Raises:
        ValueError: If source type is unknown
    """
    source_class = get_source_class(source_name)
    if source_class is None:
        raise ValueError(f"Unknown source type: {source_name}")

    config = source_class.build_config(overrides or {})
    return source_class(config=config, http_client=http_client)


def create_sources(
    source_names: list[str],
    http_client: HTTPClient,
    overrides: dict[str, dict[str, Any]] | None = None,
) -> list[BaseTrendSource]:
    """Create enabled sources in the given order.

    Unknown names are logged and skipped so a typo in the environment
    doesn't take the whole pipeline down.

    Args:
        source_names: Source names in registration order
        http_client: Shared HTTP client
        overrides: Per-source config overrides

    Returns:
        Enabled source instances
    """
    overrides = overrides or {}
    sources: list[BaseTrendSource] = []
    for name in source_names:
        try:
            source = create_source(name, http_client, overrides.get(name))
        except ValueError as e:
            logger.error("Skipping source", source=name, error=str(e))
            continue
        if source.config.enabled:
            sources.append(source)
    logger.info("Sources registered", sources=[s.name for s in sources])
    return sources


def get_all_source_names() -> list[str]:
    return list(SOURCE_CLASSES.keys())


__all__ = [
    "SOURCE_CLASSES",
    "create_source",
    "create_sources",
    "get_all_source_names",
    "get_source_class",
]
