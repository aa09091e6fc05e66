"""FastAPI application entry point.

This module creates and configures the FastAPI application instance. The
API is a thin operational surface over the pipeline: health, store stats,
recent keywords, and a manual run trigger.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Query, Request

from trendpress import __version__
from trendpress.core.container import ApplicationContainer, get_container
from trendpress.core.database import check_db_connection, close_db, init_db
from trendpress.core.logging import get_logger, setup_logging
from trendpress.services.pipeline.schemas import PipelineRunResult
from trendpress.services.storage.schemas import KeywordRecord, StoreStats

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Creates the schema, starts the scheduler when enabled, and releases
    the HTTP client and database engine on shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    container: ApplicationContainer = app.state.container
    config = container.config()
    engine = container.db_engine()

    logger.info("Starting TrendPress application", env=config.app_env)
    await init_db(engine)

    scheduler = None
    if config.scheduler_enabled:
        scheduler = container.scheduler()
        scheduler.start()

    yield

    logger.info("Shutting down TrendPress application")
    if scheduler is not None:
        scheduler.shutdown()
    await container.http_client().close()
    await close_db(engine)
    logger.info("Cleanup complete")


def _container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def create_app(container: ApplicationContainer | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        container: DI container; the process-wide one if omitted

    Returns:
        Configured FastAPI app
    """
    container = container or get_container()
    config = container.config()

    app = FastAPI(
        title=config.app_name,
        description="Korean trending-keyword news pipeline",
        version=__version__,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.get("/health")
    async def health_check(request: Request) -> dict[str, Any]:
        """Health check with pipeline stage and rate window."""
        c = _container(request)
        pipeline = c.pipeline()
        return {
            "status": "healthy",
            "app": config.app_name,
            "env": config.app_env,
            "version": __version__,
            "database": await check_db_connection(c.db_engine()),
            "stage": pipeline.current_stage.value,
            "running": pipeline.is_running,
            "rate_window": pipeline.rate_window.snapshot(),
        }

    @app.get("/stats", response_model=StoreStats)
    async def stats(request: Request) -> StoreStats:
        """Aggregate keyword, article, and crawl counters."""
        return await _container(request).article_store().get_stats()

    @app.get("/keywords/recent", response_model=list[KeywordRecord])
    async def recent_keywords(
        request: Request,
        hours: float = Query(default=6.0, gt=0, le=168),
    ) -> list[KeywordRecord]:
        """Keywords detected within the last ``hours``, newest first."""
        return await _container(request).keyword_store().query_recent(hours)

    @app.post("/pipeline/run", response_model=PipelineRunResult)
    async def run_pipeline(request: Request) -> PipelineRunResult:
        """Run one pipeline cycle now; ``skipped`` if one is already running."""
        return await _container(request).pipeline().run_once()

    return app


def build_app() -> FastAPI:
    """Factory for ``uvicorn --factory trendpress.main:build_app``."""
    setup_logging()
    return create_app()


__all__ = ["build_app", "create_app", "lifespan"]
