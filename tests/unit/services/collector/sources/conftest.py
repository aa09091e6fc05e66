"""Shared fixtures for trend source tests."""

import pytest

RANKING_HTML = """
<html><body>
  <ol class="keyword_list">
    <li><a href="/s?q=1"><span class="num">1</span> 손흥민 <span class="badge">상승</span></a></li>
    <li><a href="/s?q=2"><span class="num">2</span> 아이유</a></li>
    <li><a href="/s?q=3"><span class="num">3</span> 뉴진스 NEW</a></li>
    <li><a href="/s?q=4">이 문장은 랭킹 위젯에 들어갈 수 없을 만큼 아주 길다</a></li>
    <li><a href="/s?q=5">가</a></li>
  </ol>
</body></html>
"""

TRENDS_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:ht="https://trends.google.com/trending/rss">
  <channel>
    <title>Daily Search Trends</title>
    <item><title>손흥민</title><ht:approx_traffic>20000+</ht:approx_traffic></item>
    <item><title>날씨</title><ht:approx_traffic>10000+</ht:approx_traffic></item>
    <item><title>  김민수  </title><ht:approx_traffic>5000+</ht:approx_traffic></item>
  </channel>
</rss>
"""


@pytest.fixture
def ranking_html() -> str:
    """Portal page with a realtime ranking list."""
    return RANKING_HTML


@pytest.fixture
def trends_rss() -> str:
    """Google Trends RSS feed with three items."""
    return TRENDS_RSS
