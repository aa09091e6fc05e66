"""Stage, outcome, and statistics types for pipeline runs."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class PipelineStage(str, Enum):
    """Pipeline run stages."""

    IDLE = "idle"
    COLLECT = "collect"
    FILTER_PERSIST = "filter_persist"
    SELECT_UNPROCESSED = "select_unprocessed"
    PROCESS_EACH = "process_each"
    FINALIZE = "finalize"


class RunStatus(str, Enum):
    """How a run ended."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


class ProcessOutcome(str, Enum):
    """Result of processing one keyword record.

    Drives the follow-up actions: every outcome marks the record processed,
    only SUCCESS consumes rate budget.
    """

    SUCCESS = "success"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    FAILED = "failed"


class ProcessResult(BaseModel):
    """Outcome of one keyword's news, article, and publish step.

    Attributes:
        keyword_id: Keyword record id
        keyword: Keyword text
        outcome: Success, skipped duplicate, or failure
        article_id: Stored article id on success
        error: Failure description
    """

    keyword_id: int
    keyword: str
    outcome: ProcessOutcome
    article_id: int | None = None
    error: str | None = None

    @property
    def consumes_budget(self) -> bool:
        return self.outcome == ProcessOutcome.SUCCESS


class PipelineRunResult(BaseModel):
    """Statistics from one pipeline run.

    Attributes:
        run_id: Short id bound to every log line of the run
        status: Completed, skipped (another run in flight), or failed
        per_source: Candidates contributed by each source
        collected: Total candidates merged from all sources
        discarded_empty: Candidates that normalized to an empty string
        rejected: Classifier rejections keyed by reason tag
        batch_duplicates: Dropped as duplicates within the batch
        recent_duplicates: Dropped as seen within the recency window
        inserted: New keyword records
        write_failures: Insert attempts that failed at the store
        new_keywords: Text of the inserted keywords
        selected: Unprocessed records picked for processing
        succeeded: Records that produced an article
        skipped: Records skipped because an article already existed
        failed: Records whose processing failed
        deferred: Selected records left for a later run by the rate cap
        errors: Error messages collected during the run
    """

    run_id: str = ""
    status: RunStatus = RunStatus.COMPLETED
    started_at: datetime
    finished_at: datetime | None = None
    duration_seconds: float = 0.0

    per_source: dict[str, int] = Field(default_factory=dict)
    collected: int = 0
    discarded_empty: int = 0
    rejected: dict[str, int] = Field(default_factory=dict)
    batch_duplicates: int = 0
    recent_duplicates: int = 0
    inserted: int = 0
    write_failures: int = 0
    new_keywords: list[str] = Field(default_factory=list)

    selected: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    deferred: int = 0

    errors: list[str] = Field(default_factory=list)

    def summary(self) -> dict[str, object]:
        """Flat counters for the run-finished log line."""
        return self.model_dump(
            mode="json",
            exclude={"started_at", "finished_at", "new_keywords", "errors", "per_source"},
        )


__all__ = [
    "PipelineRunResult",
    "PipelineStage",
    "ProcessOutcome",
    "ProcessResult",
    "RunStatus",
]
