"""Prompt templates and news-context rendering for article generation."""

import re
from datetime import datetime, timedelta, timezone

from trendpress.services.news.base import NewsArticle, NewsContext

KST = timezone(timedelta(hours=9), name="KST")

_HANGUL = re.compile(r"[가-힣]")
_TAG = re.compile(r"<[^>]*>")

# Byline, copyright, and related-link boilerplate found in Korean news bodies
_BOILERPLATE = (
    re.compile(r"\[[^\]]*기자\]"),
    re.compile(r"\([^)]*@[^)]*\)"),
    re.compile(r"(?im)copyright.*$"),
    re.compile(r"(?m)ⓒ.*$"),
    re.compile(r"무단\s*전재.*?금지"),
    re.compile(r"(?m)▶.*$"),
)

MAX_DETAILED_ARTICLES = 3
MAX_DETAILED_LENGTH = 2000
MAX_HEADLINES = 8

SYSTEM_PROMPT = """당신은 대한민국 주요 뉴스 포털의 수석 편집기자입니다.
실시간 검색어를 클릭한 독자가 무슨 일인지 바로 이해할 수 있는 기사를 작성합니다.

[반드시 한국어로 작성]
- 외국 뉴스라도 한국어로 번역하거나 의역합니다
- 고유명사만 영어 병기가 가능합니다

[기사 구조]
1. 도입부 (2~3문장): 누가, 무엇을, 왜
2. ## 주요 내용 (3~4문단): 구체적 사실, 숫자, 인용
3. ## 배경 (1~2문단): 이 이슈가 중요한 이유
4. ## 향후 전망 (1~2문단)

[문체]
- 보도체: "~것으로 전해졌다", "~라고 밝혔다"
- 사실 기반 서술, 추측은 "~것으로 보인다"로 표현
- 블로그체와 낚시성 표현 금지

[분량]
- 전체 800~1500자, 소제목 2~3개

[출력 형식]
TITLE: (제목 25~40자, 핵심 키워드를 앞쪽에 배치)
SUMMARY: (요약 60~100자)
TAGS: (태그 3~5개, 쉼표 구분)
CONTENT:
(마크다운 본문)"""

USER_PROMPT = """현재 시각: {now}
실시간 트렌딩 키워드: "{keyword}"

아래 취재 자료를 바탕으로 기사를 작성하세요.
자료에 영어가 있으면 한국어로 번역하여 작성하세요.

=== 취재 자료 ===
{context}
================

- 취재 자료의 제목이나 문장을 그대로 복사하지 말고 재구성할 것
- 도입부에서 무슨 일인지 바로 설명할 것
- 출처 사이트명을 본문에 넣지 말 것

형식:
TITLE: (제목)
SUMMARY: (요약)
TAGS: (태그)
CONTENT:
(본문)"""

NO_CONTEXT = "(관련 뉴스 자료 없음)"


def hangul_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(_HANGUL.findall(text)) / len(text)


def clean_news_text(text: str | None) -> str:
    """Strip markup and newsroom boilerplate from scraped news text."""
    if not text:
        return ""
    text = _TAG.sub("", text)
    for pattern in _BOILERPLATE:
        text = pattern.sub("", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def korean_now(now: datetime | None = None) -> str:
    now = (now or datetime.now(KST)).astimezone(KST)
    return f"{now.year}년 {now.month}월 {now.day}일 {now.hour:02d}:{now.minute:02d}"


def build_news_context(news: NewsContext) -> str:
    """Render fetched news into the reference block of the user prompt.

    Bodies with the most Korean text come first, followed by up to eight
    headlines (Korean headlines preferred when there are enough of them).
    """
    sections: list[str] = []

    detailed = sorted(
        (a for a in news.top_articles_with_content if a.content and len(a.content) > 50),
        key=lambda a: hangul_ratio(a.content or ""),
        reverse=True,
    )
    if detailed:
        sections.append("=== 상세 취재 기사 ===")
        for i, article in enumerate(detailed[:MAX_DETAILED_ARTICLES], start=1):
            body = clean_news_text(article.content)[:MAX_DETAILED_LENGTH]
            sections.append(f"\n[기사 {i}] 제목: {clean_news_text(article.title)}\n본문:\n{body}")

    if news.articles:
        korean = [a for a in news.articles if hangul_ratio(a.title) > 0.2]
        headlines: list[NewsArticle] = korean if len(korean) >= 3 else news.articles
        sections.append("\n=== 관련 뉴스 헤드라인 ===")
        for i, article in enumerate(headlines[:MAX_HEADLINES], start=1):
            description = clean_news_text(article.description)
            suffix = f" : {description}" if description else ""
            sections.append(f"{i}. {clean_news_text(article.title)}{suffix}")

    return "\n".join(sections)


def build_messages(keyword: str, news: NewsContext, now: datetime | None = None) -> list[dict[str, str]]:
    """Chat messages for one article request."""
    context = build_news_context(news) or NO_CONTEXT
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT.format(now=korean_now(now), keyword=keyword, context=context),
        },
    ]


__all__ = [
    "KST",
    "SYSTEM_PROMPT",
    "USER_PROMPT",
    "build_messages",
    "build_news_context",
    "clean_news_text",
    "hangul_ratio",
    "korean_now",
]
