"""Keyword text normalization.

``normalize`` is the single cleaning step every candidate goes through before
classification, deduplication, and storage. It is pure and idempotent:
``normalize(normalize(x)) == normalize(x)``.

Steps, in order:
1. Trim
2. Collapse whitespace runs to one space
3. Strip a trailing standalone integer token (comment counts, rank suffixes)
4. Strip a leading standalone integer token (rank prefixes)
5. Strip matching enclosing quotes/brackets

The steps repeat until nothing changes, so ``'"3 손흥민"'`` ends as ``손흥민``.
An empty result means the candidate should be discarded.
"""

import re

_INVISIBLE = re.compile(r"[\u200b\u200c\u200d\u2060\ufeff]")
_WHITESPACE = re.compile(r"\s+")
_TRAILING_INT = re.compile(r"\s+\d+$")
_LEADING_INT = re.compile(r"^\d+\s+")

ENCLOSING_PAIRS: dict[str, str] = {
    '"': '"',
    "'": "'",
    "“": "”",
    "‘": "’",
    "「": "」",
    "『": "』",
    "《": "》",
    "〈": "〉",
    "【": "】",
    "[": "]",
    "(": ")",
    "<": ">",
    "{": "}",
}


def _strip_enclosing(text: str) -> str:
    while len(text) >= 2 and ENCLOSING_PAIRS.get(text[0]) == text[-1]:
        text = text[1:-1].strip()
    return text


def _clean_once(text: str) -> str:
    text = _WHITESPACE.sub(" ", text.strip())
    text = _TRAILING_INT.sub("", text)
    text = _LEADING_INT.sub("", text)
    return _strip_enclosing(text.strip())


def normalize(raw: str) -> str:
    """Normalize a raw candidate term.

    Args:
        raw: Text as scraped from a source

    Returns:
        Normalized term, possibly empty
    """
    text = _INVISIBLE.sub("", raw or "")
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


class KeywordNormalizer:
    """Injectable wrapper around :func:`normalize`."""

    def normalize(self, raw: str) -> str:
        return normalize(raw)

    __call__ = normalize


__all__ = ["ENCLOSING_PAIRS", "KeywordNormalizer", "normalize"]
