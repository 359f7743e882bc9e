import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


def configure_container(settings: Settings) -> Container:
    """Build a container with all dependencies.

    Each call returns an independent container, so several can coexist.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.models.document import ContentType
    from .core.protocols.embedder import EmbedderProtocol
    from .core.protocols.vector_store import VectorStoreProtocol
    from .core.services.chat_service import ChatService
    from .core.services.pagination_service import ResultPaginator
    from .core.services.search_service import SearchService
    from .core.services.session_store import SessionStore
    from .core.strategies.dedup import TitleDeduplicator
    from .core.strategies.ranking import Ranker
    from .core.strategies.scoring import KeywordBoostStrategy
    from .infrastructure.embeddings.sentence_transformer import (
        SentenceTransformerEmbedder,
    )
    from .infrastructure.vector_stores.chroma_store import ChromaVectorStore

    container = Container()
    primary = ContentType.parse(settings.primary_content_type)

    container.register(
        EmbedderProtocol,
        lambda: SentenceTransformerEmbedder(settings.embedding_model),
        singleton=True,
    )

    container.register(
        VectorStoreProtocol,
        lambda: ChromaVectorStore(
            host=settings.chroma_host,
            port=settings.chroma_port,
            collection_name=settings.chroma_collection,
            timeout=settings.chroma_timeout,
        ),
        singleton=True,
    )

    container.register(
        SearchService,
        lambda: SearchService(
            embedder=container.resolve(EmbedderProtocol),
            vector_store=container.resolve(VectorStoreProtocol),
            profile=settings.default_profile,
            top_k=settings.rag_max_results,
            overfetch_factor=settings.rag_overfetch_factor,
            recency_fetch_k=settings.rag_recency_fetch_k,
            recency_limit_factor=settings.rag_recency_limit_factor,
            query_prefix=settings.embedding_query_prefix,
            booster=KeywordBoostStrategy(
                body_weight=settings.boost_body_weight,
                title_weight=settings.boost_title_weight,
                two_term_bonus=settings.boost_two_term_bonus,
                three_term_bonus=settings.boost_three_term_bonus,
            ),
            deduplicator=TitleDeduplicator(
                threshold=settings.dedup_threshold, primary=primary
            ),
            ranker=Ranker(tolerance=settings.relevance_tolerance, primary=primary),
        ),
        singleton=True,
    )

    container.register(
        SessionStore,
        lambda: SessionStore(ttl_seconds=settings.session_ttl_seconds),
        singleton=True,
    )

    container.register(
        ResultPaginator,
        lambda: ResultPaginator(
            store=container.resolve(SessionStore),
            page_size=settings.rag_page_size,
        ),
        singleton=True,
    )

    container.register(
        ChatService,
        lambda: ChatService(
            search_service=container.resolve(SearchService),
            paginator=container.resolve(ResultPaginator),
            profile=settings.default_profile,
            max_search_results=settings.rag_max_results,
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
