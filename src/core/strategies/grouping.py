"""Fold chunk-level candidates into one entry per source document."""
from ..models.document import Chunk, DocumentGroup, ScoredChunk


def group_candidates(candidates: list[ScoredChunk]) -> dict[str, DocumentGroup]:
    """Group candidates by document key.

    The representative of each group is the chunk with the lowest adjusted
    distance; on ties the earlier chunk is kept.
    """
    groups: dict[str, DocumentGroup] = {}
    for candidate in candidates:
        key = candidate.document_key
        group = groups.get(key)
        if group is None:
            groups[key] = DocumentGroup(
                document_key=key,
                chunks=[candidate],
                representative=candidate,
                metadata=candidate.chunk.metadata,
            )
        else:
            group.add(candidate)
    return groups


def group_by_document(chunks: list[Chunk]) -> dict[str, DocumentGroup]:
    """Group unscored chunks (zero boost)."""
    return group_candidates([ScoredChunk(chunk=c, boost=0.0) for c in chunks])
