"""Query intent classification from text patterns."""
import re

from ..models.document import ContentType
from ..models.intent import QueryIntent

RECENCY_PATTERNS = [
    re.compile(r"\b(recent|recently|latest|newest)\b", re.I),
    re.compile(r"\b\d+\s*(most|top)\b", re.I),
    re.compile(r"\blast\s+\d+\b", re.I),
]

# Order matters (first match wins): "saved" is the more specific signal.
CONTENT_TYPE_PATTERNS = [
    (
        re.compile(
            r"\bclippings?\b|\bclipped\b|\bsaved\b|\barticles?\s+(i'?ve\s+)?(saved|clipped)\b",
            re.I,
        ),
        ContentType.CLIPPINGS,
    ),
    (
        re.compile(r"\bblogs?\b|\bwrote\b|\bpublished\b|\b(my|your)\s+blog\b", re.I),
        ContentType.BLOG,
    ),
]


def has_recency_intent(query: str) -> bool:
    return any(p.search(query) for p in RECENCY_PATTERNS)


def detect_content_type(query: str) -> ContentType | None:
    for pattern, content_type in CONTENT_TYPE_PATTERNS:
        if pattern.search(query):
            return content_type
    return None


def classify_query(query: str) -> QueryIntent:
    """Infer recency and content-type intent from the query.

    Advisory only: an empty or unrecognised query yields the neutral intent.
    """
    if not query or not query.strip():
        return QueryIntent()

    return QueryIntent(
        recency=has_recency_intent(query),
        content_type=detect_content_type(query),
    )
