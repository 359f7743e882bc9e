"""Near-duplicate title collapsing."""
import logging

from rapidfuzz.distance import Levenshtein

from ..models.document import ContentType, DocumentGroup

logger = logging.getLogger(__name__)


def edit_distance(s1: str, s2: str) -> int:
    """Levenshtein distance."""
    return Levenshtein.distance(s1, s2)


def title_similarity(title1: str, title2: str) -> float:
    """1 - edit distance normalised by the longer title (case-insensitive)."""
    s1 = title1.lower()
    s2 = title2.lower()
    longer = max(len(s1), len(s2))
    if longer == 0:
        return 1.0
    return (longer - edit_distance(s1, s2)) / longer


def length_ratio(title1: str, title2: str) -> float:
    """Upper bound on `title_similarity` from the title lengths alone."""
    n1 = len(title1.lower())
    n2 = len(title2.lower())
    if max(n1, n2) == 0:
        return 1.0
    return min(n1, n2) / max(n1, n2)


class TitleDeduplicator:
    """Drop one of each pair of documents with near-identical titles."""

    def __init__(
        self,
        threshold: float = 0.8,
        primary: ContentType = ContentType.BLOG,
    ):
        """Initialize deduplicator.

        Args:
            threshold: Similarity above which two titles are duplicates.
            primary: Partition preferred when source presence does not decide.
        """
        self._threshold = threshold
        self._primary = primary

    def loser(self, a: DocumentGroup, b: DocumentGroup) -> DocumentGroup | None:
        """Which of two duplicates to drop, or None when ambiguous."""
        if a.metadata.has_source != b.metadata.has_source:
            return b if a.metadata.has_source else a

        a_primary = a.metadata.content_type == self._primary
        b_primary = b.metadata.content_type == self._primary
        if a_primary != b_primary:
            return b if a_primary else a

        return None

    def duplicates(self, groups: dict[str, DocumentGroup]) -> set[str]:
        """Keys to drop. Every pair is evaluated, so order does not matter."""
        keys = list(groups)
        to_remove: set[str] = set()

        for i, key1 in enumerate(keys):
            for key2 in keys[i + 1 :]:
                if length_ratio(key1, key2) <= self._threshold:
                    continue
                similarity = title_similarity(key1, key2)
                if similarity <= self._threshold:
                    continue

                dropped = self.loser(groups[key1], groups[key2])
                if dropped is None:
                    logger.debug(
                        f"  Dedup: keeping both '{key1}' and '{key2}' "
                        f"(similarity={similarity:.2f})"
                    )
                    continue

                kept = key2 if dropped.document_key == key1 else key1
                to_remove.add(dropped.document_key)
                logger.debug(
                    f"  Dedup: preferring '{kept}' over '{dropped.document_key}'"
                )

        return to_remove

    def deduplicate(
        self, groups: dict[str, DocumentGroup]
    ) -> dict[str, DocumentGroup]:
        to_remove = self.duplicates(groups)
        if to_remove:
            logger.info(f"Dedup: {len(groups)} → {len(groups) - len(to_remove)}")
        return {k: g for k, g in groups.items() if k not in to_remove}
