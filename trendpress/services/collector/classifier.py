"""Keyword quality classifier.

Separates genuine search terms from sentence fragments and page noise with an
ordered, first-match rule chain. Each rule is a ``(reason, predicate)`` pair;
the first predicate that returns True rejects the term with that reason, and
a term that passes every rule is accepted.

Rules, in evaluation order:
    length -> stopword -> token-count -> stopword-token -> inflection ->
    particle-pair -> numeric -> short-acronym -> headline-fragment
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from trendpress.config.filtering import QualityFilterConfig
from trendpress.core.logging import get_logger
from trendpress.services.collector.stopwords import KEYWORD_STOPWORDS

logger = get_logger(__name__)

ACCEPTED = "accepted"

# Verb/adjective conjugations and sentence-final endings
INFLECTION_ENDING = re.compile(
    r"(?:합니다|했다|한다|된다|있다|없다|하다|되다|않다|봤다|됐다|싶다|맞아|좋아해|싫어해"
    r"|몰라|있어|없어|했어|됐어|봤어|해요|돼요|할까|는데|인데|거든|라고|다는|라는|거야"
    r"|해야|네요|올라가|나오다|들어가|내려가|가다|보다)$"
)
# Connective particles; only short terms ending in these are fragments
CONNECTIVE_ENDING = re.compile(
    r"(?:에서|으로|에게|부터|까지|처럼|만큼|대로|같이|밖에|마저|조차|도록|면서|지만|더니"
    r"|려고|라서|니까|므로|거나)$"
)
CONNECTIVE_MAX_LENGTH = 5
LOCATIVE_PHRASE = re.compile(r"(?:전면에|앞에서|뒤에서|위에서|밑에서|옆에서|속에서|안에서|밖에서)")
PARTICLE_PAIR = re.compile(r"^[가-힣][는을를이가의에서로와과도만은른선]$")
NUMERIC = re.compile(r"^\d[\d,.]*[만억원조개명건호%]?$")
LATIN_ONLY = re.compile(r"^[A-Za-z]+$")
HEADLINE_FRAGMENT = re.compile(
    r"의\s+(?:눈물|힘|곳|때|길|맛|꿈|말|법|손|집|끝|빛|밤|낮|봄|겨울|여름|가을)$"
)


class RejectReason(str, Enum):
    """Built-in rejection reason tags."""

    LENGTH = "length"
    STOPWORD = "stopword"
    TOKEN_COUNT = "token-count"
    STOPWORD_TOKEN = "stopword-token"
    INFLECTION = "inflection"
    PARTICLE_PAIR = "particle-pair"
    NUMERIC = "numeric"
    SHORT_ACRONYM = "short-acronym"
    HEADLINE_FRAGMENT = "headline-fragment"


class Verdict(BaseModel):
    """Classification outcome.

    Attributes:
        accepted: Whether the term is a usable search keyword
        reason: "accepted" or the tag of the rule that rejected it
    """

    model_config = {"frozen": True}

    accepted: bool
    reason: str = ACCEPTED

    @classmethod
    def accept(cls) -> "Verdict":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> "Verdict":
        return cls(accepted=False, reason=str(getattr(reason, "value", reason)))


@dataclass(frozen=True)
class QualityRule:
    """One link in the rule chain.

    Attributes:
        reason: Tag reported when the rule rejects
        predicate: Returns True when the term must be rejected
    """

    reason: str
    predicate: Callable[[str], bool]


class KeywordClassifier:
    """Table-driven keyword quality classifier.

    Example:
        >>> classifier = KeywordClassifier()
        >>> classifier.classify("확인")
        Verdict(accepted=False, reason='stopword')
        >>> classifier.classify("김민수").accepted
        True
    """

    def __init__(self, config: QualityFilterConfig | None = None) -> None:
        """Initialize classifier.

        Args:
            config: Filter configuration (defaults used if omitted)
        """
        self.config = config or QualityFilterConfig()
        allowed = set(self.config.allowed_terms)
        self.allowed_terms = frozenset(allowed)
        self.stopwords = frozenset(
            s for s in (KEYWORD_STOPWORDS | set(self.config.extra_stopwords))
            if s.lower() not in allowed
        )
        self._rules: list[QualityRule] = [
            QualityRule(RejectReason.LENGTH.value, self._bad_length),
            QualityRule(RejectReason.STOPWORD.value, self._is_stopword),
            QualityRule(RejectReason.TOKEN_COUNT.value, self._too_many_tokens),
            QualityRule(RejectReason.STOPWORD_TOKEN.value, self._has_stopword_token),
            QualityRule(RejectReason.INFLECTION.value, self._is_inflected),
            QualityRule(RejectReason.PARTICLE_PAIR.value, self._is_particle_pair),
            QualityRule(RejectReason.NUMERIC.value, self._is_numeric),
            QualityRule(RejectReason.SHORT_ACRONYM.value, self._is_short_acronym),
            QualityRule(RejectReason.HEADLINE_FRAGMENT.value, self._is_headline_fragment),
        ]

    @property
    def rules(self) -> tuple[QualityRule, ...]:
        """Rules in evaluation order."""
        return tuple(self._rules)

    def add_rule(self, rule: QualityRule, before: str | None = None) -> None:
        """Insert a rule into the chain.

        Args:
            rule: Rule to add
            before: Reason tag of the rule to insert in front of (append if None)

        Raises:
            ValueError: If ``before`` names no existing rule
        """
        if before is None:
            self._rules.append(rule)
            return
        for i, existing in enumerate(self._rules):
            if existing.reason == before:
                self._rules.insert(i, rule)
                return
        raise ValueError(f"No rule with reason '{before}'")

    def classify(self, term: str) -> Verdict:
        """Classify a normalized term.

        Args:
            term: Normalized keyword

        Returns:
            Verdict with the first matching rejection reason, or accepted
        """
        for rule in self._rules:
            if rule.predicate(term):
                logger.debug("Keyword rejected", term=term, reason=rule.reason)
                return Verdict.reject(rule.reason)
        return Verdict.accept()

    # ============================================
    # Predicates
    # ============================================

    def _in_stopwords(self, word: str) -> bool:
        return word in self.stopwords or word.lower() in self.stopwords

    def _bad_length(self, term: str) -> bool:
        return not (self.config.min_length <= len(term) <= self.config.max_length)

    def _is_stopword(self, term: str) -> bool:
        return self._in_stopwords(term)

    def _too_many_tokens(self, term: str) -> bool:
        return len(term.split()) >= 3

    def _has_stopword_token(self, term: str) -> bool:
        tokens = term.split()
        return len(tokens) == 2 and any(self._in_stopwords(t) for t in tokens)

    def _is_inflected(self, term: str) -> bool:
        if INFLECTION_ENDING.search(term):
            return True
        if len(term) <= CONNECTIVE_MAX_LENGTH and CONNECTIVE_ENDING.search(term):
            return True
        return bool(LOCATIVE_PHRASE.search(term))

    def _is_particle_pair(self, term: str) -> bool:
        return bool(PARTICLE_PAIR.match(term))

    def _is_numeric(self, term: str) -> bool:
        return bool(NUMERIC.match(term))

    def _is_short_acronym(self, term: str) -> bool:
        if term.lower() in self.allowed_terms:
            return False
        return bool(LATIN_ONLY.match(term)) and len(term) <= self.config.short_acronym_max_length

    def _is_headline_fragment(self, term: str) -> bool:
        return bool(HEADLINE_FRAGMENT.search(term))


__all__ = [
    "ACCEPTED",
    "KeywordClassifier",
    "QualityRule",
    "RejectReason",
    "Verdict",
]
