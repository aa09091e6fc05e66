"""Base interfaces and DTOs for trend collection.

This module defines the candidate keyword DTO and the abstract source
interface shared by every trend source adapter.
"""

import time
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from trendpress.config.sources import SourceConfig
from trendpress.core.logging import get_logger

logger = get_logger(__name__)


class CandidateKeyword(BaseModel):
    """Raw trending term observed at one source.

    Attributes:
        text: Term as displayed by the source (not yet normalized)
        source: Source adapter name
        rank: Display position at the source, 1 = most prominent
    """

    text: str
    source: str
    rank: int = Field(ge=1)


class BaseTrendSource(ABC):
    """Abstract base class for trend source adapters.

    Subclasses implement ``_fetch``. Callers only use ``fetch``, which never
    raises: any network, timeout, or parse failure is logged and turned into
    an empty result so one broken portal can't hold back the others.

    Attributes:
        name: Source identifier stored on keyword records
        config: Source configuration
    """

    name: str = "base"

    def __init__(self, config: SourceConfig) -> None:
        self.config = config

    @classmethod
    def build_config(cls, overrides: dict[str, Any]) -> SourceConfig:
        """Build this source's config from field overrides."""
        return SourceConfig(**overrides)

    async def fetch(self) -> list[CandidateKeyword]:
        """Collect candidate keywords from the source.

        Returns:
            Candidates in source display order, or an empty list on failure
        """
        start = time.monotonic()
        try:
            candidates = await self._fetch()
        except Exception as e:
            logger.warning(
                "Source fetch failed",
                source=self.name,
                error=str(e),
                error_type=type(e).__name__,
                duration=round(time.monotonic() - start, 2),
            )
            return []

        logger.info(
            "Source fetched",
            source=self.name,
            count=len(candidates),
            duration=round(time.monotonic() - start, 2),
        )
        return candidates

    @abstractmethod
    async def _fetch(self) -> list[CandidateKeyword]:
        """Fetch and parse the source.

        Raises:
            Exception: Any failure; ``fetch`` converts it to an empty result
        """

    async def health_check(self) -> bool:
        """Check if the source currently yields any candidates."""
        try:
            return bool(await self._fetch())
        except Exception:
            return False

    def _to_candidates(self, texts: list[str]) -> list[CandidateKeyword]:
        """Rank texts in display order, capped at ``max_items``."""
        return [
            CandidateKeyword(text=text, source=self.name, rank=i)
            for i, text in enumerate(texts[: self.config.max_items], start=1)
        ]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


__all__ = ["BaseTrendSource", "CandidateKeyword"]
