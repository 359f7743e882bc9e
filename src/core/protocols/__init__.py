"""Protocol interfaces for dependency injection."""
from .embedder import EmbedderProtocol
from .vector_store import VectorStoreProtocol

__all__ = [
    "EmbedderProtocol",
    "VectorStoreProtocol",
]
