"""Unit tests for the Google Trends RSS sources."""

import httpx
import pytest

from trendpress.config.sources import GoogleTrendsRSSConfig
from trendpress.services.collector.sources.google_trends import (
    GoogleTrendsEntertainmentSource,
    GoogleTrendsSource,
)


class TestGoogleTrendsSource:
    """Tests for GoogleTrendsSource."""

    @pytest.mark.asyncio
    async def test_fetch_titles(self, mock_http_client, trends_rss):
        """Test feed item titles become ranked candidates."""
        mock_http_client.get_text.return_value = trends_rss
        source = GoogleTrendsSource(GoogleTrendsRSSConfig(), mock_http_client)

        candidates = await source.fetch()

        assert [c.text for c in candidates] == ["손흥민", "날씨", "김민수"]
        assert [c.rank for c in candidates] == [1, 2, 3]
        assert candidates[0].source == "google_trends"

    @pytest.mark.asyncio
    async def test_request_params(self, mock_http_client, trends_rss):
        """Test the feed is requested for Korea without a category."""
        mock_http_client.get_text.return_value = trends_rss
        source = GoogleTrendsSource(GoogleTrendsRSSConfig(), mock_http_client)

        await source.fetch()

        args, kwargs = mock_http_client.get_text.call_args
        assert args[0] == "https://trends.google.com/trending/rss"
        assert kwargs["params"] == {"geo": "KR"}

    @pytest.mark.asyncio
    async def test_entertainment_category(self, mock_http_client, trends_rss):
        """Test the entertainment variant filters by category."""
        mock_http_client.get_text.return_value = trends_rss
        source = GoogleTrendsEntertainmentSource(
            GoogleTrendsEntertainmentSource.build_config({}), mock_http_client
        )

        candidates = await source.fetch()

        assert mock_http_client.get_text.call_args.kwargs["params"] == {
            "geo": "KR",
            "category": "e",
        }
        assert candidates[0].source == "google_trends_ent"

    @pytest.mark.asyncio
    async def test_unparseable_feed(self, mock_http_client):
        """Test garbage input yields no candidates."""
        mock_http_client.get_text.return_value = "<<<not xml"
        source = GoogleTrendsSource(GoogleTrendsRSSConfig(), mock_http_client)

        assert await source.fetch() == []

    @pytest.mark.asyncio
    async def test_network_error(self, mock_http_client):
        """Test network failures are contained."""
        mock_http_client.get_text.side_effect = httpx.ReadTimeout("slow")
        source = GoogleTrendsSource(GoogleTrendsRSSConfig(), mock_http_client)

        assert await source.fetch() == []
        assert await source.health_check() is False
