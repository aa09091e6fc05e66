"""Keyword deduplication.

Two layers, and every candidate goes through both:

- ``BatchDeduplicator``: within one collection batch, the first candidate
  for a case-insensitive key wins and keeps its source and rank.
- ``RecencyDeduplicator``: across runs, a keyword already recorded within
  the recency window is not inserted again. Sources re-poll every few
  minutes and re-emit the same top terms, so this is the steady state,
  not an error.
"""

from pydantic import BaseModel

from trendpress.core.logging import get_logger
from trendpress.services.collector.base import CandidateKeyword
from trendpress.services.interfaces import KeywordStore
from trendpress.services.storage.schemas import InsertResult, InsertStatus

logger = get_logger(__name__)


class DedupResult(BaseModel):
    """Result of a batch duplicate check.

    Attributes:
        is_duplicate: Whether the candidate was already seen in this batch
        duplicate_of: Candidate that claimed the key first
    """

    is_duplicate: bool
    duplicate_of: CandidateKeyword | None = None


def dedup_key(text: str) -> str:
    """Case-insensitive key for a normalized keyword."""
    return text.lower()


class BatchDeduplicator:
    """Collapse duplicates within one collection batch.

    Create one instance per pipeline run.

    Example:
        >>> dedup = BatchDeduplicator()
        >>> first = CandidateKeyword(text="손흥민", source="zum", rank=1)
        >>> dedup.check(first, "손흥민").is_duplicate
        False
        >>> dedup.check(CandidateKeyword(text="손흥민 ", source="nate", rank=3), "손흥민").is_duplicate
        True
    """

    def __init__(self) -> None:
        self._seen: dict[str, CandidateKeyword] = {}

    def check(self, candidate: CandidateKeyword, normalized: str) -> DedupResult:
        """Claim the key for ``normalized`` unless an earlier candidate has it.

        Args:
            candidate: Raw candidate (source and rank are kept on first claim)
            normalized: Normalized keyword text

        Returns:
            DedupResult; not a duplicate means the caller owns the key
        """
        key = dedup_key(normalized)
        first = self._seen.get(key)
        if first is not None:
            return DedupResult(is_duplicate=True, duplicate_of=first)
        self._seen[key] = candidate
        return DedupResult(is_duplicate=False)

    def __len__(self) -> int:
        return len(self._seen)


class RecencyDeduplicator:
    """Suppress keywords recorded within the recency window, then insert.

    Attributes:
        store: Keyword store
        window_hours: Recency window in hours
    """

    def __init__(self, store: KeywordStore, window_hours: float) -> None:
        self.store = store
        self.window_hours = window_hours

    async def persist(self, keyword: str, source: str, rank: int | None) -> InsertResult:
        """Insert ``keyword`` unless it is a recent duplicate.

        Args:
            keyword: Normalized keyword
            source: Source adapter name
            rank: Source display rank

        Returns:
            INSERTED with the new record, DUPLICATE, or FAILED with the error
        """
        try:
            if await self.store.is_recent_duplicate(keyword, self.window_hours):
                logger.debug("Keyword seen recently", keyword=keyword, window_hours=self.window_hours)
                return InsertResult(status=InsertStatus.DUPLICATE)
        except Exception as e:
            logger.error("Recency check failed", keyword=keyword, error=str(e))
            return InsertResult(status=InsertStatus.FAILED, error=str(e))

        return await self.store.insert(keyword, source, rank)


__all__ = [
    "BatchDeduplicator",
    "DedupResult",
    "RecencyDeduplicator",
    "dedup_key",
]
