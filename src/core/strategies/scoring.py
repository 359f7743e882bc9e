import logging
import re
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models.document import Chunk, ScoredChunk

logger = logging.getLogger(__name__)


def query_terms(query: str) -> list[str]:
    """Distinct lowercase query terms longer than two characters."""
    terms: list[str] = []
    for token in query.lower().split():
        token = token.strip(string.punctuation)
        if len(token) > 2 and token not in terms:
            terms.append(token)
    return terms


def count_occurrences(term: str, text: str) -> int:
    """Count word-boundary matches of term in lowercased text."""
    return len(re.findall(rf"\b{re.escape(term)}\b", text))


@dataclass(frozen=True)
class TermBoost:
    term: str
    body_matches: int
    title_matches: int
    boost: float


@dataclass(frozen=True)
class BoostBreakdown:
    terms: list[TermBoost]
    title_terms: int
    bonus: float

    @property
    def total(self) -> float:
        return sum(t.boost for t in self.terms) + self.bonus


class BoostStrategy(ABC):
    """Base class for lexical boost strategies."""

    @abstractmethod
    def boost(self, query: str, text: str, title: str) -> float:
        """Non-negative boost for one chunk."""
        ...

    def score(self, query: str, chunks: list[Chunk]) -> list[ScoredChunk]:
        """Attach a boost to every chunk, preserving retrieval order."""
        scored = [
            ScoredChunk(chunk=c, boost=self.boost(query, c.text, c.document_key))
            for c in chunks
        ]

        if logger.isEnabledFor(logging.DEBUG):
            top = sorted(scored, key=lambda s: s.adjusted_distance)[:10]
            for i, s in enumerate(top, 1):
                logger.debug(
                    f"  {i}. {s.document_key} (boost: {s.boost:.2f}, "
                    f"final distance: {s.adjusted_distance:.3f})"
                )

        return scored


class KeywordBoostStrategy(BoostStrategy):
    """Boost chunks whose body or document title contain query terms."""

    def __init__(
        self,
        body_weight: float = 0.2,
        title_weight: float = 0.5,
        two_term_bonus: float = 0.5,
        three_term_bonus: float = 1.0,
    ):
        """Initialize strategy.

        Args:
            body_weight: Boost per term occurrence in chunk text.
            title_weight: Boost per term occurrence in document title.
            two_term_bonus: Flat bonus when 2 distinct terms hit the title.
            three_term_bonus: Flat bonus when 3+ distinct terms hit the title.
        """
        self._body_weight = body_weight
        self._title_weight = title_weight
        self._two_term_bonus = two_term_bonus
        self._three_term_bonus = three_term_bonus

    def explain(self, query: str, text: str, title: str) -> BoostBreakdown:
        """Per-term breakdown of the boost."""
        body_lower = text.lower()
        title_lower = title.lower()

        terms = []
        title_terms = 0
        for term in query_terms(query):
            body_matches = count_occurrences(term, body_lower)
            title_matches = count_occurrences(term, title_lower)
            if title_matches:
                title_terms += 1
            terms.append(
                TermBoost(
                    term=term,
                    body_matches=body_matches,
                    title_matches=title_matches,
                    boost=body_matches * self._body_weight
                    + title_matches * self._title_weight,
                )
            )

        if title_terms >= 3:
            bonus = self._three_term_bonus
        elif title_terms >= 2:
            bonus = self._two_term_bonus
        else:
            bonus = 0.0

        return BoostBreakdown(terms=terms, title_terms=title_terms, bonus=bonus)

    def boost(self, query: str, text: str, title: str) -> float:
        return self.explain(query, text, title).total
