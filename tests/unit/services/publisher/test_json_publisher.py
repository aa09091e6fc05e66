"""Unit tests for JSONPublisher."""

import json
from datetime import UTC, datetime

import pytest

from trendpress.core.exceptions import PublishError
from trendpress.models.article import ArticleStatus
from trendpress.services.publisher import JSONPublisher
from trendpress.services.storage.schemas import ArticleRecord

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


def make_record(id: int, slug: str, keyword: str = "김민수") -> ArticleRecord:
    return ArticleRecord(
        id=id,
        keyword_id=id,
        keyword=keyword,
        title=f"{keyword} 기사 {id}",
        summary="요약",
        content="## 주요 내용\n\n본문",
        slug=slug,
        source_urls=["https://news.example.com/1"],
        status=ArticleStatus.PUBLISHED,
        created_at=NOW,
        published_at=NOW,
    )


@pytest.fixture
def publisher(tmp_path) -> JSONPublisher:
    return JSONPublisher(tmp_path, "트렌드 뉴스", "https://news.test/", clock=lambda: NOW)


class TestJSONPublisher:
    """Tests for article and index files."""

    def test_paths(self, publisher, tmp_path):
        """Test file locations and public URLs."""
        assert publisher.article_path("a-1") == tmp_path / "articles" / "a-1.json"
        assert publisher.index_path == tmp_path / "index.json"
        assert publisher.article_url("a-1") == "https://news.test/articles/a-1"

    @pytest.mark.asyncio
    async def test_publish_writes_article(self, publisher):
        """Test the article document carries the record plus site data."""
        await publisher.publish(make_record(1, "김민수-기사-1"), ["김민수", "손흥민"])

        path = publisher.article_path("김민수-기사-1")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["title"] == "김민수 기사 1"
        assert data["status"] == "published"
        assert data["url"] == "https://news.test/articles/김민수-기사-1"
        assert data["site_title"] == "트렌드 뉴스"
        assert data["trend_keywords"] == ["김민수", "손흥민"]
        assert data["published_at"].startswith("2025-01-15T12:00:00")
        assert not path.with_suffix(".json.tmp").exists()

    @pytest.mark.asyncio
    async def test_publish_overwrites(self, publisher):
        """Test republishing a slug replaces the file."""
        record = make_record(1, "same-slug")
        await publisher.publish(record, [])
        await publisher.publish(record.model_copy(update={"title": "수정된 제목"}), [])

        data = json.loads(publisher.article_path("same-slug").read_text(encoding="utf-8"))
        assert data["title"] == "수정된 제목"

    @pytest.mark.asyncio
    async def test_refresh_index(self, publisher):
        """Test the index lists article summaries without bodies."""
        records = [make_record(2, "b", "손흥민"), make_record(1, "a")]

        await publisher.refresh_index(records, ["손흥민", "김민수"])

        data = json.loads(publisher.index_path.read_text(encoding="utf-8"))
        assert data["site_title"] == "트렌드 뉴스"
        assert data["site_url"] == "https://news.test"
        assert data["generated_at"] == NOW.isoformat()
        assert data["trend_keywords"] == ["손흥민", "김민수"]
        assert [a["slug"] for a in data["articles"]] == ["b", "a"]
        assert data["articles"][0]["url"] == "https://news.test/articles/b"
        assert "content" not in data["articles"][0]
        assert "source_urls" not in data["articles"][0]

    @pytest.mark.asyncio
    async def test_empty_index(self, publisher):
        """Test an index with no articles is still written."""
        await publisher.refresh_index([], [])

        data = json.loads(publisher.index_path.read_text(encoding="utf-8"))
        assert data["articles"] == []

    @pytest.mark.asyncio
    async def test_publish_error(self, tmp_path):
        """Test a write failure raises PublishError with the path."""
        blocker = tmp_path / "blocked"
        blocker.write_text("not a directory")
        publisher = JSONPublisher(blocker, "트렌드 뉴스", "https://news.test")

        with pytest.raises(PublishError) as exc_info:
            await publisher.publish(make_record(1, "a"), [])

        assert exc_info.value.context["path"].endswith("a.json")
        assert exc_info.value.context["service_name"] == "publisher"

    @pytest.mark.asyncio
    async def test_index_error(self, tmp_path):
        """Test an index write failure raises PublishError."""
        blocker = tmp_path / "blocked"
        blocker.write_text("not a directory")
        publisher = JSONPublisher(blocker, "트렌드 뉴스", "https://news.test")

        with pytest.raises(PublishError):
            await publisher.refresh_index([], [])
