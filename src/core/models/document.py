"""Document domain models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .intent import QueryIntent


class ContentType(Enum):
    """Corpus partition a document belongs to."""
    BLOG = "blog"            # authored by the vault owner
    CLIPPINGS = "clippings"  # saved from elsewhere
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "ContentType":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ChunkMetadata:
    """Metadata stored alongside every chunk."""
    content_type: ContentType = ContentType.OTHER
    source: Optional[str] = None
    date: Optional[str] = None
    directory: str = ""
    file_path: str = ""
    profile: str = ""

    @property
    def has_source(self) -> bool:
        return bool(self.source and self.source.strip())

    @classmethod
    def from_store(cls, raw: dict) -> "ChunkMetadata":
        """Build metadata from a raw vector store record."""
        source = (raw.get("source") or "").strip()
        date = (raw.get("date") or "").strip()
        return cls(
            content_type=ContentType.parse(raw.get("contentType")),
            source=source or None,
            date=date or None,
            directory=raw.get("directory") or "",
            file_path=raw.get("filePath") or "",
            profile=raw.get("profile") or "",
        )


@dataclass(frozen=True)
class Chunk:
    """Single retrieved passage."""
    id: str
    text: str
    document_key: str
    distance: float
    metadata: ChunkMetadata = field(default_factory=ChunkMetadata)


@dataclass(frozen=True)
class ScoredChunk:
    """Chunk with its lexical boost applied."""
    chunk: Chunk
    boost: float

    @property
    def raw_distance(self) -> float:
        return self.chunk.distance

    @property
    def adjusted_distance(self) -> float:
        # May go negative for very strong matches.
        return self.chunk.distance - self.boost

    @property
    def document_key(self) -> str:
        return self.chunk.document_key


@dataclass
class DocumentGroup:
    """All chunks of one document within a retrieval batch."""
    document_key: str
    chunks: list[ScoredChunk]
    representative: ScoredChunk
    metadata: ChunkMetadata

    @property
    def best_distance(self) -> float:
        return self.representative.adjusted_distance

    @property
    def best_boost(self) -> float:
        return self.representative.boost

    def add(self, candidate: ScoredChunk) -> None:
        """Append a chunk, keeping the lowest adjusted distance as representative."""
        self.chunks.append(candidate)
        if candidate.adjusted_distance < self.representative.adjusted_distance:
            self.representative = candidate
            self.metadata = candidate.chunk.metadata


@dataclass(frozen=True)
class RankedResult:
    """One document surfaced to the caller."""
    id: str
    document_key: str
    text: str
    metadata: ChunkMetadata
    similarity: float

    @classmethod
    def from_group(cls, group: DocumentGroup) -> "RankedResult":
        best = group.representative
        return cls(
            id=best.chunk.id,
            document_key=group.document_key,
            text=best.chunk.text,
            metadata=group.metadata,
            similarity=1.0 - best.adjusted_distance,
        )


@dataclass
class SearchResponse:
    """Search response for presentation layer."""
    results: list[RankedResult]
    intent: "QueryIntent"
    strategy: str = "similarity"  # "similarity" | "recency"
