"""Pagination service - serves ranked results across conversation turns."""

import logging
from typing import Optional

from ..models.document import RankedResult
from ..models.session import Page
from .session_store import SessionStore

logger = logging.getLogger(__name__)


class ResultPaginator:
    """Split ranked results into pages keyed by session id."""

    def __init__(self, store: SessionStore, page_size: int = 5):
        """Initialize paginator.

        Args:
            store: Session store holding undelivered results.
            page_size: Results per page.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._store = store
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    def start(
        self, session_id: str, query: str, results: list[RankedResult]
    ) -> Page:
        """Emit the first page of a fresh query and keep the rest.

        A fresh query supersedes whatever was pending for this session.
        """
        first = results[: self._page_size]
        remaining = results[self._page_size :]

        if remaining:
            self._store.replace(session_id, query, remaining)
            logger.info(
                f"Session {session_id}: showing {len(first)}, "
                f"{len(remaining)} pending for '{query[:50]}'"
            )
        elif self._store.discard(session_id):
            logger.info(f"Session {session_id}: dropped previous pending results")

        return Page(results=first, remaining_count=len(remaining))

    def next_page(self, session_id: str) -> Optional[Page]:
        """Serve the next page, or None when nothing is pending."""
        taken = self._store.take(session_id, self._page_size)
        if taken is None:
            return None

        batch, remaining = taken
        logger.info(
            f"Session {session_id}: showing {len(batch)} more, {remaining} left"
        )
        return Page(results=batch, remaining_count=remaining)

    def decline(self, session_id: str) -> bool:
        """Forget pending results. Returns True if there were any."""
        declined = self._store.discard(session_id)
        if declined:
            logger.info(f"Session {session_id}: user declined more results")
        return declined

    def has_pending(self, session_id: str) -> bool:
        return self._store.has(session_id)
