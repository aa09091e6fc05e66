"""Background workers: the interval scheduler and the command-line runner."""

from trendpress.workers.scheduler import TrendScheduler

__all__ = ["TrendScheduler"]
