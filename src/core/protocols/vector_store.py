"""Vector store protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import Chunk
from ..models.filters import MetadataFilter


@runtime_checkable
class VectorStoreProtocol(Protocol):
    """Protocol for vector storage."""

    def query(
        self,
        query_embedding: list[float],
        where: MetadataFilter | None = None,
        n_results: int = 5,
    ) -> list[Chunk]:
        """Search by embedding.

        Args:
            query_embedding: Query vector.
            where: Metadata conditions every hit must satisfy.
            n_results: Maximum number of hits.

        Returns:
            Chunks ordered by ascending distance.

        Raises:
            NotReadyError: If the store is not connected.
            StoreUnavailableError: On transport failures.
        """
        ...

    def is_ready(self) -> bool:
        """Whether the store is connected."""
        ...

    def count(self) -> int:
        """Get chunk count."""
        ...
