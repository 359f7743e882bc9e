"""Multi-criteria ordering of document groups.

The ranking policy is an ordered list of comparator stages. Each stage returns
a negative number when the first group should come first, a positive number
when the second should, and zero to defer to the next stage.
"""
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Optional

from ..models.document import ContentType, DocumentGroup
from ..models.intent import QueryIntent

logger = logging.getLogger(__name__)

_DATE_FORMATS = [
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
]


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a metadata date; None when missing or unparsable."""
    if not value or not value.strip():
        return None

    text = value.strip().strip("\"'")
    parsed = None

    iso = re.sub(r"Z$", "+00:00", text)
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def compare_dates(a: Optional[datetime], b: Optional[datetime]) -> int:
    """Newest first; dated before undated."""
    if a is not None and b is not None:
        if a > b:
            return -1
        if a < b:
            return 1
        return 0
    if a is not None:
        return -1
    if b is not None:
        return 1
    return 0


class RankingStage(ABC):
    """Single comparator in the ranking policy."""

    name = "stage"

    @abstractmethod
    def compare(self, a: DocumentGroup, b: DocumentGroup) -> int:
        ...


class RecencyStage(RankingStage):
    name = "recency"

    def compare(self, a: DocumentGroup, b: DocumentGroup) -> int:
        return compare_dates(parse_date(a.metadata.date), parse_date(b.metadata.date))


class RelevanceStage(RankingStage):
    """Lower adjusted distance wins unless within the tolerance band."""

    name = "relevance"

    def __init__(self, tolerance: float = 0.1):
        self._tolerance = tolerance

    def compare(self, a: DocumentGroup, b: DocumentGroup) -> int:
        diff = a.best_distance - b.best_distance
        if abs(diff) <= self._tolerance:
            return 0
        return -1 if diff < 0 else 1


class SourcePresenceStage(RankingStage):
    name = "source"

    def compare(self, a: DocumentGroup, b: DocumentGroup) -> int:
        if a.metadata.has_source == b.metadata.has_source:
            return 0
        return -1 if a.metadata.has_source else 1


class ContentTypePreferenceStage(RankingStage):
    name = "content_type"

    def __init__(self, primary: ContentType = ContentType.BLOG):
        self._primary = primary

    def compare(self, a: DocumentGroup, b: DocumentGroup) -> int:
        a_primary = a.metadata.content_type == self._primary
        b_primary = b.metadata.content_type == self._primary
        if a_primary == b_primary:
            return 0
        return -1 if a_primary else 1


def compare_by_stages(
    stages: list[RankingStage], a: DocumentGroup, b: DocumentGroup
) -> int:
    for stage in stages:
        result = stage.compare(a, b)
        if result:
            return result
    return 0


class Ranker:
    """Order deduplicated documents according to the query intent."""

    def __init__(
        self,
        tolerance: float = 0.1,
        primary: ContentType = ContentType.BLOG,
    ):
        """Initialize ranker.

        Args:
            tolerance: Adjusted-distance differences at or below this are ties.
            primary: Preferred partition in the final tiebreak.
        """
        self._tolerance = tolerance
        self._primary = primary

    def stages(self, intent: QueryIntent) -> list[RankingStage]:
        """Comparator stages in priority order for this intent."""
        stages: list[RankingStage] = []
        if intent.recency:
            stages.append(RecencyStage())
        stages.append(RelevanceStage(self._tolerance))
        if not intent.recency:
            stages.append(RecencyStage())
        stages.append(SourcePresenceStage())
        stages.append(ContentTypePreferenceStage(self._primary))
        return stages

    def filter(
        self, groups: list[DocumentGroup], intent: QueryIntent
    ) -> list[DocumentGroup]:
        """Exclude documents outside the requested content type."""
        if intent.content_type is None:
            return groups
        return [g for g in groups if g.metadata.content_type == intent.content_type]

    def rank(
        self,
        groups: list[DocumentGroup],
        intent: QueryIntent,
        limit: Optional[int] = None,
    ) -> list[DocumentGroup]:
        candidates = self.filter(groups, intent)
        if len(candidates) < len(groups):
            logger.info(
                f"Content type filter ({intent.content_type.value}): "
                f"{len(groups)} → {len(candidates)}"
            )

        stages = self.stages(intent)
        ranked = sorted(
            candidates, key=cmp_to_key(lambda a, b: compare_by_stages(stages, a, b))
        )

        if limit is not None:
            ranked = ranked[:limit]
        return ranked
