"""Pytest fixtures: fake embedder, in-memory vector store, chunk builders."""
import numpy as np
import pytest

from src.core.errors import NotReadyError, StoreUnavailableError
from src.core.models.document import (
    Chunk,
    ChunkMetadata,
    ContentType,
    DocumentGroup,
    RankedResult,
    ScoredChunk,
)
from src.core.models.filters import MetadataFilter
from src.core.services.pagination_service import ResultPaginator
from src.core.services.search_service import SearchService
from src.core.services.session_store import SessionStore


class FakeEmbedder:
    def __init__(self, ready: bool = True):
        self.ready = ready
        self.calls: list = []

    def encode(self, texts):
        if not self.ready:
            raise NotReadyError("Embedder not initialized")
        self.calls.append(texts)
        return np.zeros(4)

    def is_ready(self) -> bool:
        return self.ready

    def warmup(self) -> None:
        self.ready = True


class InMemoryVectorStore:
    """Returns stored records ordered by their preset distance."""

    def __init__(self, records: list[dict] | None = None, ready: bool = True):
        self.records = records or []
        self.ready = ready
        self.fail = False
        self.queries: list[tuple] = []

    def add(self, id: str, text: str, file: str, distance: float, **metadata) -> None:
        record = {
            "id": id,
            "text": text,
            "file": file,
            "distance": distance,
            "profile": "public",
            "contentType": "other",
            "source": "",
            "date": "",
            "directory": "",
            "filePath": f"{file}.md",
        }
        record.update(metadata)
        self.records.append(record)

    def query(self, query_embedding, where: MetadataFilter | None = None, n_results: int = 5):
        if not self.ready:
            raise NotReadyError("Vector store not initialized")
        if self.fail:
            raise StoreUnavailableError("connection refused")
        self.queries.append((where, n_results))

        hits = [r for r in self.records if where is None or where.matches(r)]
        hits.sort(key=lambda r: r["distance"])
        return [
            Chunk(
                id=r["id"],
                text=r["text"],
                document_key=r["file"],
                distance=r["distance"],
                metadata=ChunkMetadata.from_store(r),
            )
            for r in hits[:n_results]
        ]

    def is_ready(self) -> bool:
        return self.ready

    def count(self) -> int:
        return len(self.records)


def make_chunk(
    key: str,
    distance: float = 0.5,
    text: str = "",
    content_type: ContentType = ContentType.OTHER,
    source: str | None = None,
    date: str | None = None,
    chunk_id: str | None = None,
) -> Chunk:
    return Chunk(
        id=chunk_id or f"{key}-0",
        text=text,
        document_key=key,
        distance=distance,
        metadata=ChunkMetadata(
            content_type=content_type,
            source=source,
            date=date,
            file_path=f"{key}.md",
            profile="public",
        ),
    )


def make_group(key: str, distance: float = 0.5, boost: float = 0.0, **kwargs) -> DocumentGroup:
    scored = ScoredChunk(chunk=make_chunk(key, distance, **kwargs), boost=boost)
    return DocumentGroup(
        document_key=key,
        chunks=[scored],
        representative=scored,
        metadata=scored.chunk.metadata,
    )


def make_results(count: int) -> list[RankedResult]:
    return [
        RankedResult(
            id=f"doc-{i}",
            document_key=f"Doc {i}",
            text=f"text {i}",
            metadata=ChunkMetadata(),
            similarity=1.0 - i / 100,
        )
        for i in range(count)
    ]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def search_service(embedder, store) -> SearchService:
    return SearchService(embedder=embedder, vector_store=store, top_k=5)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_store(clock) -> SessionStore:
    return SessionStore(ttl_seconds=600, clock=clock)


@pytest.fixture
def paginator(session_store) -> ResultPaginator:
    return ResultPaginator(session_store, page_size=5)
