"""Unit tests for TrendPipeline.

Tests cover:
- Candidate filtering statistics
- Hourly rate cap and window reset
- Per-keyword outcomes (success, duplicate skip, failure, timeout)
- Single-flight runs
- FINALIZE running after stage failures
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from trendpress.models.article import ArticleStatus
from trendpress.services.pipeline.schemas import PipelineStage, RunStatus
from trendpress.services.storage.schemas import ArticleDraft


class TestCollectAndFilter:
    """Tests for COLLECT and FILTER_PERSIST."""

    @pytest.mark.asyncio
    async def test_filter_statistics(self, make_pipeline, make_source, keyword_store):
        """Test each candidate is counted by what happened to it."""
        sources = [
            make_source("zum", ["1 손흥민", "속보", "오늘의 날씨 정말 최악이다", "아이유"]),
            make_source("nate", ["손흥민", "  ", "김민수"]),
        ]
        pipeline = make_pipeline(sources)

        result = await pipeline.run_once()

        assert result.status == RunStatus.COMPLETED
        assert result.per_source == {"zum": 4, "nate": 3}
        assert result.collected == 7
        assert result.discarded_empty == 1
        assert result.rejected == {"stopword": 1, "token-count": 1}
        assert result.batch_duplicates == 1
        assert result.inserted == 3
        assert result.new_keywords == ["손흥민", "아이유", "김민수"]
        assert keyword_store.records[0].source == "zum"
        assert keyword_store.crawls == [("all", 7, 3)]

    @pytest.mark.asyncio
    async def test_recent_duplicates_next_run(self, make_pipeline, make_source, clock):
        """Test the same terms a few minutes later are recent duplicates."""
        pipeline = make_pipeline([make_source("zum", ["손흥민", "아이유"])])
        await pipeline.run_once()
        clock.advance(minutes=3)

        result = await pipeline.run_once()

        assert result.inserted == 0
        assert result.recent_duplicates == 2

    @pytest.mark.asyncio
    async def test_reinserted_after_window(self, make_pipeline, make_source, clock):
        """Test a term comes back as new once the recency window has passed."""
        pipeline = make_pipeline([make_source("zum", ["손흥민"])], recency_window_hours=3)
        await pipeline.run_once()
        clock.advance(hours=4)

        result = await pipeline.run_once()

        assert result.inserted == 1

    @pytest.mark.asyncio
    async def test_failing_source_isolated(self, make_pipeline, make_source):
        """Test a failing source contributes nothing and others still count."""
        sources = [
            make_source("zum", [], error=RuntimeError("layout changed")),
            make_source("nate", ["김민수"]),
        ]

        result = await make_pipeline(sources).run_once()

        assert result.status == RunStatus.COMPLETED
        assert result.per_source == {"zum": 0, "nate": 1}
        assert result.inserted == 1

    @pytest.mark.asyncio
    async def test_source_raising_from_fetch(self, make_pipeline, make_source):
        """Test a source whose fetch itself raises is contained."""
        broken = MagicMock()
        broken.name = "broken"
        broken.fetch = AsyncMock(side_effect=RuntimeError("boom"))

        result = await make_pipeline([broken, make_source("nate", ["김민수"])]).run_once()

        assert result.per_source == {"broken": 0, "nate": 1}
        assert result.errors == ["broken: boom"]
        assert result.inserted == 1


class TestRateCap:
    """Tests for the hourly processing budget."""

    @pytest.mark.asyncio
    async def test_cap_limits_processing(self, make_pipeline, keyword_store, article_generator):
        """Test only the newest records up to the cap are processed."""
        keyword_store.seed("키워드1", "키워드2", "키워드3", "키워드4", "키워드5")
        pipeline = make_pipeline(max_articles_per_hour=2)

        result = await pipeline.run_once()

        assert result.selected == 2
        assert result.succeeded == 2
        assert article_generator.calls == ["키워드5", "키워드4"]
        assert keyword_store.unprocessed == ["키워드1", "키워드2", "키워드3"]
        assert pipeline.rate_window.exhausted is True

    @pytest.mark.asyncio
    async def test_cap_holds_then_resets(
        self, make_pipeline, keyword_store, article_generator, clock
    ):
        """Test nothing is processed until the hour has passed."""
        keyword_store.seed("키워드1", "키워드2", "키워드3", "키워드4", "키워드5")
        pipeline = make_pipeline(max_articles_per_hour=2)
        await pipeline.run_once()

        clock.advance(minutes=30)
        held = await pipeline.run_once()
        assert held.selected == 0
        assert len(article_generator.calls) == 2

        clock.advance(minutes=31)
        resumed = await pipeline.run_once()
        assert resumed.succeeded == 2
        assert keyword_store.unprocessed == ["키워드1"]

    @pytest.mark.asyncio
    async def test_skips_do_not_consume_budget(
        self, make_pipeline, keyword_store, article_store, news_provider
    ):
        """Test duplicate skips use no budget and are still marked processed."""
        keyword_store.seed("기존", "새로운")
        await article_store.insert_article(
            ArticleDraft(keyword="기존", title="t", content="c", slug="old")
        )
        pipeline = make_pipeline(max_articles_per_hour=5)

        result = await pipeline.run_once()

        assert result.succeeded == 1
        assert result.skipped == 1
        assert pipeline.rate_window.count == 1
        assert news_provider.calls == ["새로운"]
        assert keyword_store.unprocessed == []

    @pytest.mark.asyncio
    async def test_zero_cap(self, make_pipeline, keyword_store, article_generator):
        """Test a zero cap processes nothing but still finalizes."""
        keyword_store.seed("키워드1")

        result = await make_pipeline(max_articles_per_hour=0).run_once()

        assert result.selected == 0
        assert article_generator.calls == []
        assert keyword_store.unprocessed == ["키워드1"]


class TestProcessEach:
    """Tests for per-keyword outcomes."""

    @pytest.mark.asyncio
    async def test_success_stores_and_publishes(
        self, make_pipeline, keyword_store, article_store, publisher
    ):
        """Test a keyword becomes a stored, published article."""
        keyword_store.seed("손흥민", "아이유")

        result = await make_pipeline().run_once()

        assert result.succeeded == 2
        assert [a.keyword for a in article_store.articles] == ["아이유", "손흥민"]
        assert all(a.status == ArticleStatus.PUBLISHED for a in article_store.articles)
        assert article_store.articles[0].keyword_id == 2
        assert article_store.articles[0].source_urls == ["https://news.example.com/1"]
        article, trend_keywords = publisher.published[0]
        assert article.keyword == "아이유"
        assert trend_keywords == ["아이유", "손흥민"]

    @pytest.mark.asyncio
    async def test_draft_mode(self, make_pipeline, keyword_store, article_store, publisher):
        """Test articles stay drafts and unpublished when auto_publish is off."""
        keyword_store.seed("손흥민")

        result = await make_pipeline(auto_publish=False).run_once()

        assert result.succeeded == 1
        assert article_store.articles[0].status == ArticleStatus.DRAFT
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_published_copy_handed_to_publisher(
        self, make_pipeline, keyword_store, publisher, clock
    ):
        """Test the publisher sees the article as published with its publish time."""
        keyword_store.seed("손흥민")

        await make_pipeline().run_once()

        article, _ = publisher.published[0]
        assert article.status == ArticleStatus.PUBLISHED
        assert article.published_at == clock()

    @pytest.mark.asyncio
    async def test_publish_failure_discards_article(
        self, make_pipeline, keyword_store, article_store, publisher
    ):
        """Test a failed publish leaves no article behind for the index or the skip check."""
        keyword_store.seed("손흥민")
        publisher.publish_error = OSError("disk full")

        result = await make_pipeline().run_once()

        assert result.failed == 1
        assert result.succeeded == 0
        assert article_store.articles == []
        assert publisher.index_refreshes[-1][0] == []
        assert not await article_store.has_article_for_keyword("손흥민", 24)
        assert keyword_store.unprocessed == []

    @pytest.mark.asyncio
    async def test_publish_timeout_discards_article(
        self, make_pipeline, keyword_store, article_store, publisher
    ):
        """Test a publish cut off by the keyword timeout is rolled back too."""
        keyword_store.seed("손흥민")

        async def slow_publish(article, trend_keywords):
            await asyncio.sleep(1)

        publisher.publish = slow_publish

        result = await make_pipeline(keyword_timeout_seconds=0.05).run_once()

        assert result.failed == 1
        assert result.errors == ["손흥민: timed out"]
        assert article_store.articles == []

    @pytest.mark.asyncio
    async def test_failure_isolated(self, make_pipeline, keyword_store, article_generator):
        """Test one failing keyword doesn't stop the rest."""
        keyword_store.seed("첫째", "둘째", "셋째")
        article_generator.failures["둘째"] = RuntimeError("model overloaded")

        result = await make_pipeline().run_once()

        assert result.status == RunStatus.COMPLETED
        assert result.succeeded == 2
        assert result.failed == 1
        assert result.errors == ["둘째: model overloaded"]
        assert keyword_store.unprocessed == []

    @pytest.mark.asyncio
    async def test_no_news_is_failure(self, make_pipeline, keyword_store, news_provider):
        """Test a keyword without news fails and is still marked processed."""
        keyword_store.seed("무소식")
        news_provider.empty.add("무소식")

        result = await make_pipeline().run_once()

        assert result.failed == 1
        assert result.errors == ["무소식: no article"]
        assert keyword_store.unprocessed == []

    @pytest.mark.asyncio
    async def test_timeout(self, make_pipeline, keyword_store, article_generator):
        """Test a keyword exceeding its deadline fails."""
        keyword_store.seed("느린", "빠른")
        article_generator.delays["느린"] = 5

        result = await make_pipeline(keyword_timeout_seconds=0.05).run_once()

        assert result.succeeded == 1
        assert result.failed == 1
        assert "느린: timed out" in result.errors

    @pytest.mark.asyncio
    async def test_delay_after_attempts_only(
        self, make_pipeline, keyword_store, article_store, article_generator, sleep
    ):
        """Test the inter-item pause follows successes and failures, not skips."""
        keyword_store.seed("실패", "중복", "성공")
        article_generator.failures["실패"] = RuntimeError("bad")
        await article_store.insert_article(
            ArticleDraft(keyword="중복", title="t", content="c", slug="dup")
        )

        await make_pipeline(inter_item_delay_seconds=2).run_once()

        assert sleep.await_args_list == [call(2), call(2)]

    @pytest.mark.asyncio
    async def test_mark_processed_failure(self, make_pipeline, keyword_store):
        """Test a failing mark is recorded and the success still counts."""
        keyword_store.seed("손흥민")
        keyword_store.mark_processed = AsyncMock(side_effect=RuntimeError("locked"))

        result = await make_pipeline().run_once()

        assert result.succeeded == 1
        assert result.errors == ["mark_processed 1: locked"]


class TestRunLifecycle:
    """Tests for single-flight runs and finalization."""

    @pytest.mark.asyncio
    async def test_single_flight(self, make_pipeline, keyword_store, article_generator):
        """Test a trigger during a run is skipped."""
        keyword_store.seed("손흥민")
        article_generator.release = asyncio.Event()
        pipeline = make_pipeline()

        first = asyncio.create_task(pipeline.run_once())
        await article_generator.started.wait()
        assert pipeline.is_running is True
        assert pipeline.current_stage == PipelineStage.PROCESS_EACH

        skipped = await pipeline.run_once()
        assert skipped.status == RunStatus.SKIPPED
        assert skipped.selected == 0

        article_generator.release.set()
        result = await first

        assert result.status == RunStatus.COMPLETED
        assert result.succeeded == 1
        assert article_generator.calls == ["손흥민"]
        assert pipeline.is_running is False
        assert pipeline.current_stage == PipelineStage.IDLE

    @pytest.mark.asyncio
    async def test_empty_run_still_finalizes(self, make_pipeline, publisher):
        """Test the index is refreshed even with nothing collected."""
        result = await make_pipeline().run_once()

        assert result.status == RunStatus.COMPLETED
        assert result.run_id
        assert result.finished_at is not None
        assert publisher.index_refreshes == [([], [])]

    @pytest.mark.asyncio
    async def test_stage_failure_still_finalizes(self, make_pipeline, keyword_store, publisher):
        """Test a failed stage marks the run failed and FINALIZE still runs."""
        keyword_store.seed("손흥민")
        keyword_store.query_unprocessed = AsyncMock(side_effect=RuntimeError("db locked"))
        pipeline = make_pipeline()

        result = await pipeline.run_once()

        assert result.status == RunStatus.FAILED
        assert result.errors == ["select_unprocessed: db locked"]
        assert len(publisher.index_refreshes) == 1
        assert pipeline.current_stage == PipelineStage.IDLE

    @pytest.mark.asyncio
    async def test_finalize_failure(self, make_pipeline, publisher):
        """Test a failing index refresh is reported, not raised."""
        publisher.refresh_error = OSError("read-only file system")
        pipeline = make_pipeline()

        result = await pipeline.run_once()

        assert result.status == RunStatus.FAILED
        assert result.errors == ["finalize: read-only file system"]

        publisher.refresh_error = None
        assert (await pipeline.run_once()).status == RunStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_index_inputs(self, make_pipeline, keyword_store, article_store, publisher):
        """Test the index gets published articles and distinct trend keywords."""
        keyword_store.seed("BTS", "bts", "아이유")

        await make_pipeline(max_articles_per_hour=1).run_once()

        articles, trend_keywords = publisher.index_refreshes[-1]
        assert [a.keyword for a in articles] == ["아이유"]
        assert trend_keywords == ["아이유", "bts"]

    @pytest.mark.asyncio
    async def test_trend_keywords_window(self, make_pipeline, keyword_store, publisher, clock):
        """Test old keywords drop out of the index trend list."""
        keyword_store.seed("오래된")
        clock.advance(hours=7)
        keyword_store.seed("최근")

        await make_pipeline(max_articles_per_hour=0).run_once()

        assert publisher.index_refreshes[-1][1] == ["최근"]
