"""Trend pipeline orchestrator.

One run walks a linear sequence of stages:

    COLLECT -> FILTER_PERSIST -> SELECT_UNPROCESSED -> PROCESS_EACH -> FINALIZE

1. COLLECT: all sources fetch concurrently; results merge in source order
2. FILTER_PERSIST: normalize -> classify -> batch dedup -> recency dedup -> insert
3. SELECT_UNPROCESSED: newest unprocessed keywords, bounded by the rate window
4. PROCESS_EACH: one keyword at a time: news -> article -> store -> publish
5. FINALIZE: refresh the published index, even when nothing new came in

Runs are single-flight: a trigger that arrives while a run is in progress
is logged and skipped. No exception escapes ``run_once``.

Usage:
    pipeline = TrendPipeline(sources=..., classifier=..., ...)
    result = await pipeline.run_once()
"""

import asyncio
import time
import uuid
from collections import Counter

import structlog

from trendpress.config.pipeline import PipelineConfig
from trendpress.core.exceptions import PipelineError
from trendpress.core.logging import get_logger
from trendpress.core.state_machine import StateMachine, TransitionMap
from trendpress.core.types import Clock, Sleeper, utc_now
from trendpress.models.article import ArticleStatus
from trendpress.services.collector.base import BaseTrendSource, CandidateKeyword
from trendpress.services.collector.classifier import KeywordClassifier
from trendpress.services.collector.deduplicator import BatchDeduplicator, RecencyDeduplicator
from trendpress.services.collector.normalizer import KeywordNormalizer
from trendpress.services.interfaces import (
    ArticleGenerator,
    ArticleStore,
    KeywordStore,
    NewsContextProvider,
    Publisher,
)
from trendpress.services.pipeline.rate_window import RateWindow
from trendpress.services.pipeline.schemas import (
    PipelineRunResult,
    PipelineStage,
    ProcessOutcome,
    ProcessResult,
    RunStatus,
)
from trendpress.services.storage.schemas import (
    ArticleDraft,
    ArticleRecord,
    InsertStatus,
    KeywordRecord,
)

logger = get_logger(__name__)

STAGE_TRANSITIONS: TransitionMap[PipelineStage] = {
    PipelineStage.IDLE: [PipelineStage.COLLECT],
    PipelineStage.COLLECT: [PipelineStage.FILTER_PERSIST, PipelineStage.FINALIZE],
    PipelineStage.FILTER_PERSIST: [PipelineStage.SELECT_UNPROCESSED, PipelineStage.FINALIZE],
    PipelineStage.SELECT_UNPROCESSED: [PipelineStage.PROCESS_EACH, PipelineStage.FINALIZE],
    PipelineStage.PROCESS_EACH: [PipelineStage.FINALIZE],
    PipelineStage.FINALIZE: [PipelineStage.IDLE],
}


class TrendPipeline:
    """End-to-end trend ingestion and article pipeline.

    Owns its rate window and run lock, so separate instances (e.g. in tests)
    never share budget or block each other.
    """

    def __init__(
        self,
        sources: list[BaseTrendSource],
        classifier: KeywordClassifier,
        keyword_store: KeywordStore,
        article_store: ArticleStore,
        news_provider: NewsContextProvider,
        article_generator: ArticleGenerator,
        publisher: Publisher,
        config: PipelineConfig | None = None,
        normalizer: KeywordNormalizer | None = None,
        clock: Clock = utc_now,
        sleep: Sleeper = asyncio.sleep,
    ):
        """Initialize pipeline.

        Args:
            sources: Trend sources in registration order
            classifier: Keyword quality classifier
            keyword_store: Keyword persistence
            article_store: Article persistence
            news_provider: Per-keyword news context
            article_generator: Article writer
            publisher: Publishes articles and refreshes the index
            config: Pipeline settings
            normalizer: Keyword normalizer
            clock: Time source
            sleep: Async sleep used for the inter-item delay
        """
        self.sources = sources
        self.classifier = classifier
        self.keyword_store = keyword_store
        self.article_store = article_store
        self.news_provider = news_provider
        self.article_generator = article_generator
        self.publisher = publisher
        self.config = config or PipelineConfig()
        self.normalizer = normalizer or KeywordNormalizer()
        self.clock = clock
        self.sleep = sleep

        self.rate_window = RateWindow(cap=self.config.max_articles_per_hour, window_start=clock())
        self._stages = StateMachine(PipelineStage.IDLE, STAGE_TRANSITIONS)
        self._lock = asyncio.Lock()

    @property
    def current_stage(self) -> PipelineStage:
        return self._stages.current

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    # ============================================
    # Entry point
    # ============================================

    async def run_once(self) -> PipelineRunResult:
        """Run one full pipeline cycle unless one is already in flight.

        Returns:
            Run statistics; status is ``skipped`` if another run holds the lock
        """
        if self._lock.locked():
            now = self.clock()
            logger.info(
                "Pipeline run skipped",
                reason="previous run still in progress",
                stage=self.current_stage.value,
            )
            return PipelineRunResult(status=RunStatus.SKIPPED, started_at=now, finished_at=now)

        async with self._lock:
            run_id = uuid.uuid4().hex[:8]
            with structlog.contextvars.bound_contextvars(run_id=run_id):
                return await self._run(run_id)

    async def _run(self, run_id: str) -> PipelineRunResult:
        result = PipelineRunResult(run_id=run_id, started_at=self.clock())
        start = time.monotonic()
        logger.info("Pipeline run started", sources=[s.name for s in self.sources])

        try:
            try:
                self._stages.transition_to(PipelineStage.COLLECT)
                candidates = await self._collect(result)

                self._stages.transition_to(PipelineStage.FILTER_PERSIST)
                await self._filter_and_persist(candidates, result)

                self._stages.transition_to(PipelineStage.SELECT_UNPROCESSED)
                records = await self._select_unprocessed(result)

                if records:
                    self._stages.transition_to(PipelineStage.PROCESS_EACH)
                    await self._process_each(records, result)
            except Exception as e:
                self._record_failure(result, e)

            self._stages.transition_to(PipelineStage.FINALIZE)
            try:
                await self._finalize()
            except Exception as e:
                self._record_failure(result, e)
        except Exception as e:
            self._record_failure(result, e)
        finally:
            self._stages.reset(PipelineStage.IDLE)
            result.finished_at = self.clock()
            result.duration_seconds = round(time.monotonic() - start, 3)

        logger.info("Pipeline run finished", **result.summary())
        return result

    def _record_failure(self, result: PipelineRunResult, error: Exception) -> None:
        stage = self.current_stage.value
        failure = PipelineError(str(error), stage=stage).with_context(
            cause=type(error).__name__
        )
        logger.error("Pipeline stage failed", **failure.to_dict(), exc_info=error)
        result.status = RunStatus.FAILED
        result.errors.append(f"{stage}: {error}")

    # ============================================
    # Stages
    # ============================================

    async def _collect(self, result: PipelineRunResult) -> list[CandidateKeyword]:
        """Fetch all sources concurrently and merge in registration order."""
        outcomes = await asyncio.gather(
            *(source.fetch() for source in self.sources), return_exceptions=True
        )

        merged: list[CandidateKeyword] = []
        for source, outcome in zip(self.sources, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.error("Source raised from fetch", source=source.name, error=str(outcome))
                result.errors.append(f"{source.name}: {outcome}")
                outcome = []
            result.per_source[source.name] = len(outcome)
            merged.extend(outcome)

        result.collected = len(merged)
        logger.info("Candidates collected", total=len(merged), per_source=result.per_source)
        return merged

    async def _filter_and_persist(
        self, candidates: list[CandidateKeyword], result: PipelineRunResult
    ) -> None:
        """Normalize, classify, deduplicate, and insert each candidate."""
        batch = BatchDeduplicator()
        recency = RecencyDeduplicator(self.keyword_store, self.config.recency_window_hours)
        rejected: Counter[str] = Counter()

        for candidate in candidates:
            keyword = self.normalizer.normalize(candidate.text)
            if not keyword:
                result.discarded_empty += 1
                continue

            verdict = self.classifier.classify(keyword)
            if not verdict.accepted:
                rejected[verdict.reason] += 1
                logger.debug(
                    "Candidate rejected",
                    keyword=keyword,
                    source=candidate.source,
                    reason=verdict.reason,
                )
                continue

            if batch.check(candidate, keyword).is_duplicate:
                result.batch_duplicates += 1
                continue

            inserted = await recency.persist(keyword, candidate.source, candidate.rank)
            if inserted.status == InsertStatus.INSERTED:
                result.inserted += 1
                result.new_keywords.append(keyword)
                logger.info(
                    "New keyword", keyword=keyword, source=candidate.source, rank=candidate.rank
                )
            elif inserted.status == InsertStatus.DUPLICATE:
                result.recent_duplicates += 1
            else:
                result.write_failures += 1
                result.errors.append(f"insert {keyword}: {inserted.error}")

        result.rejected = dict(rejected)

        try:
            await self.keyword_store.log_crawl("all", result.collected, result.inserted)
        except Exception as e:
            logger.warning("Crawl log write failed", error=str(e))

        logger.info(
            "Candidates filtered",
            collected=result.collected,
            rejected=result.rejected,
            batch_duplicates=result.batch_duplicates,
            recent_duplicates=result.recent_duplicates,
            inserted=result.inserted,
            write_failures=result.write_failures,
        )

    async def _select_unprocessed(self, result: PipelineRunResult) -> list[KeywordRecord]:
        """Pick unprocessed keywords within the remaining hourly budget."""
        if self.rate_window.refresh(self.clock()):
            logger.info("Rate window reset")

        budget = self.rate_window.remaining
        if budget <= 0:
            logger.info("Hourly article cap reached", **self.rate_window.snapshot())
            return []

        records = await self.keyword_store.query_unprocessed(limit=budget)
        result.selected = len(records)
        logger.info("Unprocessed keywords selected", count=len(records), budget=budget)
        return records

    async def _process_each(self, records: list[KeywordRecord], result: PipelineRunResult) -> None:
        """Process selected keywords strictly one at a time."""
        for index, record in enumerate(records):
            self.rate_window.refresh(self.clock())
            if self.rate_window.exhausted:
                result.deferred = len(records) - index
                logger.info(
                    "Hourly article cap reached, deferring keywords",
                    deferred=result.deferred,
                    **self.rate_window.snapshot(),
                )
                break

            processed = await self._process_keyword(record)
            try:
                await self.keyword_store.mark_processed(record.id)
            except Exception as e:
                logger.error("Mark processed failed", keyword_id=record.id, error=str(e))
                result.errors.append(f"mark_processed {record.id}: {e}")

            if processed.outcome == ProcessOutcome.SUCCESS:
                self.rate_window.consume()
                result.succeeded += 1
            elif processed.outcome == ProcessOutcome.SKIPPED_DUPLICATE:
                result.skipped += 1
                continue
            else:
                result.failed += 1
                result.errors.append(f"{record.keyword}: {processed.error}")

            if self.config.inter_item_delay_seconds > 0:
                await self.sleep(self.config.inter_item_delay_seconds)

    async def _process_keyword(self, record: KeywordRecord) -> ProcessResult:
        """Run news, article, and publish for one keyword.

        Never raises; failures become a FAILED result.
        """
        try:
            if await self.article_store.has_article_for_keyword(
                record.keyword, self.config.existing_article_window_hours
            ):
                logger.info("Article already exists, skipping", keyword=record.keyword)
                return ProcessResult(
                    keyword_id=record.id,
                    keyword=record.keyword,
                    outcome=ProcessOutcome.SKIPPED_DUPLICATE,
                )

            article = await asyncio.wait_for(
                self._generate_and_publish(record),
                timeout=self.config.keyword_timeout_seconds,
            )
        except TimeoutError:
            logger.error(
                "Keyword processing timed out",
                keyword=record.keyword,
                timeout=self.config.keyword_timeout_seconds,
            )
            return ProcessResult(
                keyword_id=record.id,
                keyword=record.keyword,
                outcome=ProcessOutcome.FAILED,
                error="timed out",
            )
        except Exception as e:
            logger.error(
                "Keyword processing failed",
                keyword=record.keyword,
                error=str(e),
                exc_info=True,
            )
            return ProcessResult(
                keyword_id=record.id,
                keyword=record.keyword,
                outcome=ProcessOutcome.FAILED,
                error=str(e),
            )

        if article is None:
            logger.warning("No article generated", keyword=record.keyword)
            return ProcessResult(
                keyword_id=record.id,
                keyword=record.keyword,
                outcome=ProcessOutcome.FAILED,
                error="no article",
            )

        logger.info("Keyword processed", keyword=record.keyword, article_id=article.id)
        return ProcessResult(
            keyword_id=record.id,
            keyword=record.keyword,
            outcome=ProcessOutcome.SUCCESS,
            article_id=article.id,
        )

    async def _generate_and_publish(self, record: KeywordRecord) -> ArticleRecord | None:
        news = await self.news_provider.fetch_news_for_keyword(record.keyword)
        generated = await self.article_generator.generate(record.keyword, news)
        if generated is None:
            return None

        # Stored as a draft until the published file exists
        saved = await self.article_store.insert_article(
            ArticleDraft(
                keyword_id=record.id,
                keyword=record.keyword,
                title=generated.title,
                summary=generated.summary,
                content=generated.content,
                slug=generated.slug,
                source_urls=generated.source_urls,
                image=generated.image,
                status=ArticleStatus.DRAFT,
            )
        )
        if not self.config.auto_publish:
            return saved

        try:
            return await self._publish(saved)
        except (Exception, asyncio.CancelledError):
            await self._discard(saved)
            raise

    async def _publish(self, saved: ArticleRecord) -> ArticleRecord:
        published_at = self.clock()
        article = saved.model_copy(
            update={"status": ArticleStatus.PUBLISHED, "published_at": published_at}
        )
        await self.publisher.publish(article, await self._trend_keywords())
        return await self.article_store.mark_published(saved.id, published_at)

    async def _discard(self, saved: ArticleRecord) -> None:
        """Drop an article whose publish did not complete.

        Keeps it out of the index and lets the keyword get a fresh article
        when it trends again.
        """
        try:
            await self.article_store.delete_article(saved.id)
        except Exception as e:
            logger.error("Discarding unpublished article failed", article_id=saved.id, error=str(e))
            return
        logger.warning("Unpublished article discarded", article_id=saved.id, slug=saved.slug)

    async def _finalize(self) -> None:
        """Refresh the published index from the latest articles and trends."""
        articles = await self.article_store.list_published(self.config.index_article_limit)
        trend_keywords = await self._trend_keywords()
        await self.publisher.refresh_index(articles, trend_keywords)
        logger.info("Index refreshed", articles=len(articles), trend_keywords=len(trend_keywords))

    async def _trend_keywords(self) -> list[str]:
        """Distinct recent keywords, newest first."""
        records = await self.keyword_store.query_recent(self.config.trend_window_hours)
        seen: set[str] = set()
        keywords: list[str] = []
        for record in records:
            key = record.keyword.lower()
            if key in seen:
                continue
            seen.add(key)
            keywords.append(record.keyword)
            if len(keywords) >= self.config.index_keyword_limit:
                break
        return keywords


__all__ = ["STAGE_TRANSITIONS", "TrendPipeline"]
