"""Scoring, grouping, deduplication and ranking strategies."""
from .continuation import detect_continuation
from .dedup import TitleDeduplicator, edit_distance, title_similarity
from .grouping import group_by_document, group_candidates
from .intent import classify_query
from .ranking import Ranker, parse_date
from .scoring import BoostStrategy, KeywordBoostStrategy

__all__ = [
    "detect_continuation",
    "TitleDeduplicator",
    "edit_distance",
    "title_similarity",
    "group_by_document",
    "group_candidates",
    "classify_query",
    "Ranker",
    "parse_date",
    "BoostStrategy",
    "KeywordBoostStrategy",
]
