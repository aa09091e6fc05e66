"""Pytest fixtures for generator service tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from trendpress.infrastructure.llm import LLMClient, LLMResponse
from trendpress.services.news.base import NewsArticle, NewsContext

BODY_TEXT = (
    "김민수가 15일 열린 리그 경기에서 후반 추가시간 결승골을 터뜨렸다. "
    "소속팀은 이 골로 다섯 경기 연속 패배의 사슬을 끊었다. "
    "감독은 경기 직후 선수들의 집중력을 높이 평가했다. "
    "[홍길동 기자] ⓒ 스포츠일보 무단 전재 및 재배포 금지"
)

LLM_OUTPUT = """TITLE: 김민수, 극장 결승골로 팀 5연패 탈출 이끌어
SUMMARY: 김민수가 후반 추가시간 결승골을 터뜨리며 소속팀의 5연패 탈출을 이끌었다.
TAGS: 김민수, 축구, K리그
CONTENT:
김민수가 15일 열린 리그 경기에서 후반 추가시간 결승골을 터뜨리며 팀의 5연패 탈출을 이끌었다. 경기장을 찾은 팬들은 기립박수로 화답했고, 구단은 이날 승리를 시즌 반등의 계기로 삼겠다는 입장이다.

## 주요 내용

김민수는 1-1로 맞선 후반 추가시간 페널티 박스 안에서 왼발 슛으로 골망을 갈랐다. 이번 골은 그의 시즌 10번째 득점으로 팀 내 최다 득점 기록이다. 감독은 경기 후 "김민수가 팀을 구했다"라고 밝혔다.

## 배경

소속팀은 최근 다섯 경기에서 모두 패하며 강등권 추락 위기에 놓여 있었다. 주전 선수들의 잇따른 부상으로 전력 누수가 심각했던 것으로 전해졌다. 팬들 사이에서는 감독 교체 요구까지 나온 상황이었다.

## 향후 전망

이번 승리로 분위기 반전에 성공한 팀은 다음 주말 선두와의 맞대결을 앞두고 있다. 김민수의 발끝에 다시 한 번 관심이 쏠릴 것으로 보인다."""


@pytest.fixture
def news() -> NewsContext:
    """News context with Korean headlines and one crawled body."""
    articles = [
        NewsArticle(
            title="김민수, 결승골로 팀 구해",
            description="김민수가 후반 추가시간 결승골을 터뜨리며 팀의 연패를 끊었다. 팬들은 환호했다.",
            link="https://sports.example.com/a/1",
            source="naver",
        ),
        NewsArticle(
            title="김민수 인터뷰 \"팀이 먼저\"",
            description="경기 후 인터뷰에서 김민수는 동료들에게 공을 돌렸다.",
            link="https://news.google.com/rss/articles/abc",
            source="google_news",
        ),
        NewsArticle(
            title="김민수 시즌 10호골 달성",
            description="",
            link="https://daily.example.com/a/3",
            source="google_news",
        ),
    ]
    top = articles[0].model_copy(update={"content": BODY_TEXT})
    return NewsContext(keyword="김민수", articles=articles, top_articles_with_content=[top])


@pytest.fixture
def llm_output() -> str:
    """Well-formed LLM response that passes the quality gate."""
    return LLM_OUTPUT


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """LLM client mock returning the well-formed response."""
    client = MagicMock(spec=LLMClient)
    client.complete = AsyncMock(
        return_value=LLMResponse(content=LLM_OUTPUT, model="deepseek/deepseek-chat", usage={})
    )
    return client
