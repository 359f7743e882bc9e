"""Domain models."""
from .document import (
    Chunk,
    ChunkMetadata,
    ContentType,
    DocumentGroup,
    RankedResult,
    ScoredChunk,
    SearchResponse,
)
from .intent import QueryIntent
from .filters import Condition, MetadataFilter
from .session import Page, PaginationSession
from .chat import ChatTurn, ContinuationSignal, SourceRef, TurnKind

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ContentType",
    "DocumentGroup",
    "RankedResult",
    "ScoredChunk",
    "SearchResponse",
    "QueryIntent",
    "Condition",
    "MetadataFilter",
    "Page",
    "PaginationSession",
    "ChatTurn",
    "ContinuationSignal",
    "SourceRef",
    "TurnKind",
]
