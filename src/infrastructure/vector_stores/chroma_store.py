import logging
from pathlib import Path
from typing import Any, Optional

import requests

from src.core.errors import NotReadyError, StoreUnavailableError
from src.core.models.document import Chunk, ChunkMetadata
from src.core.models.filters import MetadataFilter

logger = logging.getLogger(__name__)

_OPERATORS = {"eq": "$eq", "ne": "$ne"}


def to_where(where: MetadataFilter | None) -> Optional[dict]:
    """Translate a metadata filter into Chroma `where` syntax."""
    if not where:
        return None
    clauses = [{c.field: {_OPERATORS[c.op]: c.value}} for c in where.conditions]
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def document_key(metadata: dict) -> str:
    """Owning document key: the source file name without extension."""
    name = metadata.get("file")
    if name:
        return name
    file_path = metadata.get("filePath") or ""
    return Path(file_path).stem if file_path else "Unknown"


class ChromaVectorStore:
    """Vector store using ChromaDB HTTP API."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8001,
        collection_name: str = "vault",
        tenant: str = "default_tenant",
        database: str = "default_database",
        timeout: float = 30.0,
    ):
        """Initialize ChromaDB client.

        Args:
            host: ChromaDB host.
            port: ChromaDB port.
            collection_name: Collection name.
            tenant: Tenant name.
            database: Database name.
            timeout: HTTP timeout in seconds.
        """
        self._base_url = f"http://{host}:{port}/api/v2"
        self._tenant = tenant
        self._database = database
        self._collection_name = collection_name
        self._timeout = timeout
        self._collection_id: Optional[str] = None

    @property
    def _collections_url(self) -> str:
        return f"{self._base_url}/tenants/{self._tenant}/databases/{self._database}/collections"

    def _request(self, method: str, url: str, **kwargs) -> Any:
        """Send a request and decode its JSON body."""
        try:
            resp = requests.request(method, url, timeout=self._timeout, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise StoreUnavailableError(f"Chroma request failed: {e}") from e
        except ValueError as e:
            raise StoreUnavailableError(f"Chroma returned invalid JSON: {e}") from e

    def connect(self) -> str:
        """Resolve the collection ID; the store is ready afterwards."""
        if self._collection_id:
            return self._collection_id

        collections = self._request("GET", self._collections_url)
        if not isinstance(collections, list):
            raise StoreUnavailableError("Unexpected collection listing from Chroma")

        for col in collections:
            if not isinstance(col, dict) or not col.get("id"):
                continue
            if col.get("name") == self._collection_name:
                self._collection_id = col["id"]
                logger.info(f"Connected to collection: {self._collection_name}")
                return self._collection_id

        raise NotReadyError(f"Collection {self._collection_name} not found")

    def warmup(self) -> None:
        self.connect()

    def is_ready(self) -> bool:
        return self._collection_id is not None

    def _require_collection(self) -> str:
        if not self._collection_id:
            raise NotReadyError("Vector store not initialized")
        return self._collection_id

    def query(
        self,
        query_embedding: list[float],
        where: MetadataFilter | None = None,
        n_results: int = 5,
    ) -> list[Chunk]:
        """Search by embedding."""
        col_id = self._require_collection()

        payload = {
            "query_embeddings": [query_embedding],
            "n_results": n_results,
            "include": ["documents", "metadatas", "distances"],
        }
        chroma_where = to_where(where)
        if chroma_where:
            payload["where"] = chroma_where

        data = self._request(
            "POST", f"{self._collections_url}/{col_id}/query", json=payload
        )

        try:
            return parse_query_result(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise StoreUnavailableError(f"Malformed Chroma query result: {e!r}") from e

    def count(self) -> int:
        """Get chunk count."""
        col_id = self._require_collection()
        count = self._request("GET", f"{self._collections_url}/{col_id}/count")
        if not isinstance(count, int):
            raise StoreUnavailableError(f"Unexpected chunk count from Chroma: {count!r}")
        return count


def parse_query_result(data: dict) -> list[Chunk]:
    """Chunks from the first query of a Chroma query response."""
    results = []
    if data.get("ids") and data["ids"][0]:
        for i in range(len(data["ids"][0])):
            metadata = data["metadatas"][0][i] or {}
            results.append(
                Chunk(
                    id=data["ids"][0][i],
                    text=data["documents"][0][i] or "",
                    document_key=document_key(metadata),
                    distance=data["distances"][0][i],
                    metadata=ChunkMetadata.from_store(metadata),
                )
            )
    return results
