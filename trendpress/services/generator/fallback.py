"""Headline-based fallback article.

Used when the LLM is unavailable or its output fails the quality gate.
The article is assembled from the fetched news only: headlines, snippet
sentences, and excerpts of crawled bodies, arranged under the same section
headings the LLM is asked to produce.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime

from trendpress.services.generator.prompts import KST, clean_news_text, hangul_ratio
from trendpress.services.news.base import NewsArticle, NewsContext

_SENTENCE_END = re.compile(r"(?<=다\.)\s+")
_KEY_CHARS = re.compile(r"[^가-힣a-zA-Z]")
_HANGUL = re.compile(r"[가-힣]")
_HANGUL_CHUNK = re.compile(r"[가-힣]{2,}")

FALLBACK_TAGS = ("실시간", "이슈", "뉴스")


def default_title(keyword: str) -> str:
    return f"{keyword} 관련 최신 동향 심층 분석"


def default_summary(keyword: str) -> str:
    return f"'{keyword}'이(가) 포털 실시간 검색어에 급상승하며 화제가 되고 있다."


@dataclass
class FallbackArticle:
    title: str
    summary: str
    content: str
    tags: list[str] = field(default_factory=list)


@dataclass
class _Fact:
    title: str
    description: str


def is_relevant(article: NewsArticle, keyword: str) -> bool:
    """Whether a news hit actually mentions the keyword.

    Matches the whole keyword, at least half of its words, or any Hangul
    chunk of two or more syllables.
    """
    kw = keyword.lower().strip()
    if not kw:
        return False
    title = article.title.lower()
    description = article.description.lower()
    content = (article.content or "").lower()
    if kw in title or kw in description or kw in content:
        return True

    parts = [p for p in kw.split() if len(p) >= 2]
    if len(parts) >= 2:
        matched = sum(1 for p in parts if p in title or p in description)
        if matched >= (len(parts) + 1) // 2:
            return True

    return any(chunk in title or chunk in description for chunk in _HANGUL_CHUNK.findall(kw))


def first_sentence(text: str, min_offset: int = 15) -> str | None:
    """Text up to the first '다.' at or after ``min_offset``."""
    end = text.find("다.", min_offset)
    return text[: end + 2] if end > 0 else None


def cut_at_sentence(text: str, limit: int, min_keep: int) -> str:
    text = text[:limit]
    end = text.rfind("다.")
    return text[: end + 2] if end > min_keep else text


def _facts(articles: list[NewsArticle]) -> list[_Fact]:
    facts: list[_Fact] = []
    seen: set[str] = set()
    for article in articles:
        title = clean_news_text(article.title)
        if len(title) < 5:
            continue
        key = _KEY_CHARS.sub("", title)[:15]
        if key in seen:
            continue
        seen.add(key)
        description = clean_news_text(article.description)
        if description[:20] == title[:20]:
            description = ""
        facts.append(_Fact(title=title, description=description))
    return facts


def _excerpts(articles: list[NewsArticle]) -> list[str]:
    excerpts: list[str] = []
    for article in articles:
        body = clean_news_text(article.content)
        if hangul_ratio(body) < 0.2:
            continue
        sentences = [
            s
            for s in _SENTENCE_END.split(body[:800])
            if 15 < len(s) < 200 and not any(w in s for w in ("기자", "저작권", "무단"))
        ][:4]
        if sentences:
            excerpts.append(" ".join(sentences))
    return excerpts


def _fact_sentence(fact: _Fact) -> str:
    if len(fact.description) > 20:
        sentence = first_sentence(fact.description)
        if sentence:
            return sentence
    return f"{fact.title}(으)로 전해졌다."


def compose_fallback_article(
    keyword: str, news: NewsContext, now: datetime | None = None
) -> FallbackArticle:
    """Build an article from fetched news without the LLM.

    Args:
        keyword: Trending keyword
        news: Fetched news context (may be empty)
        now: Reference time for the dateline

    Returns:
        Title, summary, markdown content, and tags
    """
    now = (now or datetime.now(KST)).astimezone(KST)
    date_str = f"{now.year}년 {now.month}월 {now.day}일"

    relevant = [a for a in news.articles if is_relevant(a, keyword)]
    korean = [a for a in relevant if hangul_ratio(a.title) > 0.15]
    facts = _facts(korean if len(korean) >= 2 else relevant)
    excerpts = _excerpts(
        [
            a
            for a in news.top_articles_with_content
            if a.content and len(a.content) > 50 and is_relevant(a, keyword)
        ]
    )

    title = default_title(keyword)
    if facts:
        best = facts[0].title
        if hangul_ratio(best) > 0.3 and 10 <= len(best) <= 50:
            title = best

    summary = ""
    if facts and len(facts[0].description) > 20:
        summary = first_sentence(facts[0].description, 20) or facts[0].description[:90]
    if len(summary) < 20 or len(_HANGUL.findall(summary)) < 5:
        summary = default_summary(keyword)

    outlook = (
        "## 향후 전망\n\n"
        f"'{keyword}' 관련 후속 보도와 추가 정보가 이어질 것으로 보인다. "
        "업계와 대중의 관심이 지속되는 만큼 향후 전개 상황이 주목된다."
    )

    if not facts and not excerpts:
        paragraphs = [
            f"{date_str}, '{keyword}'이(가) 주요 포털 실시간 검색어에 오르며 "
            "네티즌들의 관심이 집중되고 있다.",
            "## 주요 내용",
            f"'{keyword}'에 대한 관심이 급격히 높아지면서 관련 검색량이 크게 늘어난 것으로 "
            "나타났다. 해당 키워드는 포털 실시간 검색어 상위권에 올라 화제를 모으고 있다.",
            f"온라인 커뮤니티와 SNS를 중심으로 '{keyword}' 관련 게시물이 빠르게 확산되고 "
            "있으며, 이에 따른 후속 보도도 잇따르고 있는 상황이다.",
            "## 배경",
            f"'{keyword}'이(가) 실시간 검색어에 오른 정확한 배경에 대해서는 추가 취재가 "
            "필요한 상황이다. 다만 검색량이 급증한 점으로 미루어 사회적 관심이 높은 "
            "이슈인 것으로 보인다.",
            outlook,
        ]
    else:
        paragraphs = []
        if excerpts:
            paragraphs.append(cut_at_sentence(excerpts[0], 200, 50))
        else:
            lead = first_sentence(facts[0].description) if len(facts[0].description) > 20 else None
            paragraphs.append(
                f"{date_str}, '{keyword}' 관련 뉴스가 잇따라 보도되며 실시간 검색어에 올랐다. "
                + (lead or f"{facts[0].title}에 대한 관심이 집중되고 있다.")
            )

        paragraphs.append("## 주요 내용")
        if excerpts:
            paragraphs.extend(cut_at_sentence(e, 400, 100) for e in excerpts[:2])
        elif len(facts) >= 2:
            sentences = [_fact_sentence(f) for f in facts[:4]]
            paragraphs.extend(" ".join(sentences[i : i + 2]) for i in range(0, len(sentences), 2))
        else:
            paragraphs.append(
                f"'{keyword}' 관련 보도가 이어지고 있다. "
                "관련 검색량이 급증하며 주요 포털 실시간 검색어에 올랐다."
            )

        if len(excerpts) > 1:
            paragraphs.append("## 배경")
            paragraphs.append(cut_at_sentence(excerpts[-1], 300, 50))
        elif len(facts) > 2:
            paragraphs.append("## 배경")
            others = ", ".join(f.title for f in facts[2:5])
            paragraphs.append(f"이 밖에도 {others} 등 관련 보도가 잇따르고 있다.")

        paragraphs.append(outlook)

    content = re.sub(r"\n{3,}", "\n\n", "\n\n".join(paragraphs)).strip()
    return FallbackArticle(
        title=title,
        summary=summary,
        content=content,
        tags=[keyword, *FALLBACK_TAGS],
    )


__all__ = [
    "FallbackArticle",
    "compose_fallback_article",
    "default_summary",
    "default_title",
    "is_relevant",
]
