"""Structured logging configuration using structlog.

Production emits one JSON object per line; development gets the colored
console renderer with call sites. Every event carries the app name and env,
and anything bound with ``structlog.contextvars`` (the pipeline binds
``run_id`` per run) is merged in.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from trendpress.core.config import get_config

# Libraries that log every request or tick at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "LiteLLM", "litellm", "apscheduler", "aiosqlite")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add app name and environment to every event."""
    config = get_config()
    event_dict["app"] = config.app_name
    event_dict["env"] = config.app_env
    return event_dict


def _quiet_third_party(level: int) -> None:
    floor = max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(floor)


def setup_logging() -> None:
    """Configure structlog and the standard library root logger.

    Safe to call more than once; the last call wins.

    Example:
        >>> setup_logging()
        >>> logger = get_logger(__name__)
        >>> logger.info("Pipeline run started", run_id="a1b2")
    """
    config = get_config()
    level = getattr(logging, config.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    _quiet_third_party(level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if config.is_development:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    if config.is_production:
        processors.extend(
            [
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(ensure_ascii=False),
            ]
        )
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        Configured structlog logger

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Source fetched", source="zum", count=10)
        >>> logger.warning("Source fetch failed", source="nate", error="Connection timeout")
    """
    return structlog.get_logger(name)


__all__ = ["add_app_context", "get_logger", "setup_logging"]
