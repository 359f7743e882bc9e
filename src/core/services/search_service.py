"""Search service - hybrid vault retrieval and ranking."""

import logging
from functools import cmp_to_key
from typing import Optional

from ..errors import NotReadyError, StoreUnavailableError
from ..models.document import ContentType, RankedResult, SearchResponse
from ..models.filters import MetadataFilter
from ..models.intent import QueryIntent
from ..protocols.embedder import EmbedderProtocol
from ..protocols.vector_store import VectorStoreProtocol
from ..strategies.dedup import TitleDeduplicator
from ..strategies.grouping import group_by_document, group_candidates
from ..strategies.intent import classify_query
from ..strategies.ranking import Ranker, RecencyStage
from ..strategies.scoring import BoostStrategy, KeywordBoostStrategy

logger = logging.getLogger(__name__)

MIN_OVERFETCH_FACTOR = 10


class SearchService:
    """Vector search with keyword boosting, dedup and intent-aware ranking."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        vector_store: VectorStoreProtocol,
        profile: str = "public",
        top_k: int = 5,
        overfetch_factor: int = 10,
        recency_fetch_k: int = 2000,
        recency_limit_factor: int = 4,
        query_prefix: str = "",
        booster: BoostStrategy | None = None,
        deduplicator: TitleDeduplicator | None = None,
        ranker: Ranker | None = None,
    ):
        """Initialize search service.

        Args:
            embedder: Embedding service.
            vector_store: Vector store.
            profile: Default visibility profile.
            top_k: Default number of results to return.
            overfetch_factor: Candidates fetched per requested result.
            recency_fetch_k: Chunks scanned for date-sorted queries.
            recency_limit_factor: Extra depth for date-sorted queries.
            query_prefix: Prefix some embedding models expect on queries.
            booster: Lexical boost strategy.
            deduplicator: Near-duplicate title collapsing.
            ranker: Ranking policy.
        """
        if overfetch_factor < MIN_OVERFETCH_FACTOR:
            raise ValueError(
                f"overfetch_factor must be >= {MIN_OVERFETCH_FACTOR}, "
                f"got {overfetch_factor}"
            )

        self._embedder = embedder
        self._vector_store = vector_store
        self._profile = profile
        self._top_k = top_k
        self._overfetch_factor = overfetch_factor
        self._recency_fetch_k = recency_fetch_k
        self._recency_limit_factor = recency_limit_factor
        self._query_prefix = query_prefix

        self._booster = booster or KeywordBoostStrategy()
        self._deduplicator = deduplicator or TitleDeduplicator()
        self._ranker = ranker or Ranker()

    def is_ready(self) -> bool:
        return self._embedder.is_ready() and self._vector_store.is_ready()

    def _ensure_ready(self) -> None:
        if not self._embedder.is_ready():
            raise NotReadyError("Embedding model not initialized")
        if not self._vector_store.is_ready():
            raise NotReadyError("Vector store not initialized")

    def _embed(self, text: str) -> list[float]:
        try:
            return self._embedder.encode(f"{self._query_prefix}{text}").tolist()
        except NotReadyError:
            raise
        except Exception as e:
            raise StoreUnavailableError(f"Embedding failed: {e}") from e

    def search(
        self,
        query: str,
        profile: Optional[str] = None,
        top_k: Optional[int] = None,
    ) -> SearchResponse:
        """Search the vault.

        Args:
            query: Search query.
            profile: Override visibility profile.
            top_k: Override number of results.

        Returns:
            Ranked results with the inferred intent.

        Raises:
            NotReadyError: Embedder or store not initialized.
            StoreUnavailableError: Embedder or store failed.
        """
        profile = profile or self._profile
        top_k = top_k or self._top_k
        intent = classify_query(query)

        self._ensure_ready()

        if intent.wants_recent_of_type:
            logger.info(
                f"Using date-sorted {intent.content_type.value} search "
                f"for '{query[:50]}'"
            )
            results = self.recent_by_type(
                intent.content_type, profile, top_k * self._recency_limit_factor
            )
            return SearchResponse(results=results, intent=intent, strategy="recency")

        results = self._similarity_search(query, intent, profile, top_k)
        return SearchResponse(results=results, intent=intent, strategy="similarity")

    def _similarity_search(
        self, query: str, intent: QueryIntent, profile: str, top_k: int
    ) -> list[RankedResult]:
        if intent.recency:
            logger.info("  Date-based query detected - prioritizing recency")
        if intent.content_type is not None:
            logger.info(f"  Restricting to {intent.content_type.value}")

        chunks = self._vector_store.query(
            query_embedding=self._embed(query),
            where=MetadataFilter().eq("profile", profile),
            n_results=top_k * self._overfetch_factor,
        )

        candidates = self._booster.score(query, chunks)
        groups = group_candidates(candidates)
        survivors = self._deduplicator.deduplicate(groups)
        ranked = self._ranker.rank(list(survivors.values()), intent, limit=top_k)
        results = [RankedResult.from_group(g) for g in ranked]

        logger.info(
            f"Search: {len(chunks)} chunks → {len(groups)} docs → "
            f"{len(results)}/{top_k} results for '{query[:50]}'"
        )
        return results

    def recent_by_type(
        self, content_type: ContentType, profile: Optional[str] = None, limit: int = 5
    ) -> list[RankedResult]:
        """Newest dated documents of one content type.

        Scans a large filtered batch and sorts purely by date instead of
        similarity.
        """
        profile = profile or self._profile
        self._ensure_ready()

        where = (
            MetadataFilter()
            .eq("profile", profile)
            .eq("contentType", content_type.value)
            .ne("date", "")
        )
        chunks = self._vector_store.query(
            query_embedding=self._embed(f"recent {content_type.value} articles"),
            where=where,
            n_results=self._recency_fetch_k,
        )
        logger.info(f"  Found {len(chunks)} {content_type.value} chunks with dates")

        groups = [g for g in group_by_document(chunks).values() if g.metadata.date]
        groups.sort(key=cmp_to_key(RecencyStage().compare))
        groups = groups[:limit]

        results = []
        for group in groups:
            first = group.chunks[0].chunk
            results.append(
                RankedResult(
                    id=first.id,
                    document_key=group.document_key,
                    text=first.text,
                    metadata=group.metadata,
                    similarity=1.0 - first.distance,
                )
            )

        for i, r in enumerate(results, 1):
            logger.debug(f"    {i}. {r.document_key} ({r.metadata.date})")
        return results

    def status(self) -> dict:
        """Readiness summary for health checks."""
        store_ready = self._vector_store.is_ready()
        status = {
            "embedder": "ready" if self._embedder.is_ready() else "initializing",
            "vector_store": "ready" if store_ready else "initializing",
            "profile": self._profile,
            "top_k": self._top_k,
        }
        if store_ready:
            try:
                status["chunks"] = self._vector_store.count()
            except StoreUnavailableError as e:
                logger.warning(f"Chunk count unavailable: {e}")
        return status

