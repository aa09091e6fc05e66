"""Periodic pipeline trigger.

Runs ``TrendPipeline.run_once`` on a fixed interval with APScheduler's
``AsyncIOScheduler``. The first run fires immediately on start.

``max_instances=1`` and ``coalesce=True`` keep APScheduler from stacking
missed ticks; the pipeline's own lock still decides single-flight, since
manual triggers from the HTTP API share the same pipeline.
"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from trendpress.core.exceptions import ConfigError
from trendpress.core.logging import get_logger
from trendpress.core.types import Clock, utc_now
from trendpress.services.pipeline.orchestrator import TrendPipeline
from trendpress.services.pipeline.schemas import PipelineRunResult

logger = get_logger(__name__)

JOB_ID = "trend_pipeline"


class TrendScheduler:
    """Interval scheduler for the trend pipeline.

    Must be started from inside a running event loop.

    Example:
        scheduler = TrendScheduler(pipeline, interval_minutes=3)
        scheduler.start()
        ...
        scheduler.shutdown()
    """

    def __init__(
        self,
        pipeline: TrendPipeline,
        interval_minutes: int,
        clock: Clock = utc_now,
    ) -> None:
        if interval_minutes < 1:
            raise ConfigError(
                f"Scheduler interval must be at least 1 minute, got {interval_minutes}",
                key="crawl_interval_minutes",
            )
        self.pipeline = pipeline
        self.interval_minutes = interval_minutes
        self.clock = clock
        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self.last_result: PipelineRunResult | None = None

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        """Register the pipeline job and start ticking."""
        if self.running:
            logger.warning("Scheduler already running")
            return

        self.scheduler.add_job(
            self.tick,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=JOB_ID,
            name="Trend pipeline",
            next_run_time=self.clock(),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info("Scheduler started", interval_minutes=self.interval_minutes)

    async def tick(self) -> PipelineRunResult:
        """One scheduled run. The pipeline never raises."""
        self.last_result = await self.pipeline.run_once()
        return self.last_result

    def shutdown(self) -> None:
        if not self.running:
            return
        self.scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")


__all__ = ["JOB_ID", "TrendScheduler"]
