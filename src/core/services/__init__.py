"""Core business services."""
from .search_service import SearchService
from .session_store import SessionStore
from .pagination_service import ResultPaginator
from .chat_service import ChatService

__all__ = [
    "SearchService",
    "SessionStore",
    "ResultPaginator",
    "ChatService",
]
