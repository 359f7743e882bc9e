"""Chat service - coordinates search and multi-turn pagination."""

import logging
from typing import Optional

from ..models.chat import ChatTurn, ContinuationSignal, SourceRef, TurnKind
from ..models.document import RankedResult
from ..strategies.continuation import detect_continuation
from .pagination_service import ResultPaginator
from .search_service import SearchService

logger = logging.getLogger(__name__)

MAX_CONTEXT_CHARS = 3000


class ChatService:
    """Turns user messages into pages of vault results.

    Short yes/no replies continue or drop a pending result list; everything
    else is searched as a new query.
    """

    def __init__(
        self,
        search_service: SearchService,
        paginator: ResultPaginator,
        profile: Optional[str] = None,
        max_search_results: int = 20,
    ):
        """Initialize chat service.

        Args:
            search_service: Search service.
            paginator: Result paginator.
            profile: Visibility profile for searches (service default if None).
            max_search_results: Total ranked results per query across all pages.
        """
        self._search = search_service
        self._paginator = paginator
        self._profile = profile
        self._max_search_results = max_search_results

    def handle(self, message: str, session_id: str = "default") -> ChatTurn:
        """Process one user message.

        Raises:
            NotReadyError: Search backend not initialized.
            StoreUnavailableError: Search backend failed.
        """
        signal = detect_continuation(message)

        if signal is not ContinuationSignal.NONE and self._paginator.has_pending(
            session_id
        ):
            if signal is ContinuationSignal.NEGATIVE:
                self._paginator.decline(session_id)
                return ChatTurn(kind=TurnKind.DECLINED, query=message)

            page = self._paginator.next_page(session_id)
            if page is not None:
                return ChatTurn(
                    kind=TurnKind.CONTINUATION,
                    query=message,
                    page=page,
                    context=format_context(page.results),
                    sources=get_sources(page.results),
                )
            logger.info(f"Session {session_id} expired, treating '{message}' as query")

        return self.search(message, session_id)

    def search(self, query: str, session_id: str = "default") -> ChatTurn:
        """Run a fresh query and start paginating it."""
        response = self._search.search(
            query, profile=self._profile, top_k=self._max_search_results
        )
        page = self._paginator.start(session_id, query, response.results)

        return ChatTurn(
            kind=TurnKind.RESULTS,
            query=query,
            page=page,
            context=format_context(page.results),
            sources=get_sources(page.results),
        )


def format_context(results: list[RankedResult]) -> str:
    """Format results as context for the response generator."""
    if not results:
        return ""

    parts = []
    for r in results:
        text = r.text
        if len(text) > MAX_CONTEXT_CHARS:
            text = text[:MAX_CONTEXT_CHARS] + "\n\n[... content truncated ...]"

        if r.metadata.has_source:
            header = f"[Source: {r.document_key}]({r.metadata.source})"
        else:
            header = f"Source: {r.document_key}"
        parts.append(f"## {header}\n{text}")

    return "\n\n---\n\n".join(parts)


def get_sources(results: list[RankedResult]) -> list[SourceRef]:
    """Unique sources in result order."""
    seen = set()
    sources = []
    for r in results:
        if r.document_key not in seen:
            seen.add(r.document_key)
            sources.append(SourceRef(name=r.document_key, url=r.metadata.source))
    return sources
