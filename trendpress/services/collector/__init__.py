"""Trend collection services.

This package implements the ingestion half of the pipeline:
1. Sources fetch raw candidate keywords from trend portals
2. Normalizer cleans each candidate
3. Classifier rejects sentence fragments and noise
4. Deduplicator drops batch and recent duplicates before insertion
"""

from trendpress.services.collector.base import BaseTrendSource, CandidateKeyword
from trendpress.services.collector.classifier import (
    KeywordClassifier,
    QualityRule,
    RejectReason,
    Verdict,
)
from trendpress.services.collector.deduplicator import (
    BatchDeduplicator,
    DedupResult,
    RecencyDeduplicator,
)
from trendpress.services.collector.normalizer import KeywordNormalizer, normalize

__all__ = [
    "BaseTrendSource",
    "BatchDeduplicator",
    "CandidateKeyword",
    "DedupResult",
    "KeywordClassifier",
    "KeywordNormalizer",
    "QualityRule",
    "RecencyDeduplicator",
    "RejectReason",
    "Verdict",
    "normalize",
]
