"""Retrieval error hierarchy."""


class RetrievalError(Exception):
    """Base exception for retrieval operations."""

    pass


class NotReadyError(RetrievalError):
    """Embedder or vector store has not been initialized yet.

    Callers are expected to retry later or fall back to a non-semantic search.
    """

    pass


class StoreUnavailableError(RetrievalError):
    """Transient failure talking to the embedder or the vector store."""

    pass
