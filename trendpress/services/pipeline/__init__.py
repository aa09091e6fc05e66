"""Trend pipeline orchestration."""

from trendpress.services.pipeline.orchestrator import TrendPipeline
from trendpress.services.pipeline.rate_window import RateWindow
from trendpress.services.pipeline.schemas import (
    PipelineRunResult,
    PipelineStage,
    ProcessOutcome,
    ProcessResult,
    RunStatus,
)

__all__ = [
    "PipelineRunResult",
    "PipelineStage",
    "ProcessOutcome",
    "ProcessResult",
    "RateWindow",
    "RunStatus",
    "TrendPipeline",
]
