"""Pagination domain models."""
from dataclasses import dataclass, field

from .document import RankedResult


@dataclass
class PaginationSession:
    """Results of one query not yet shown to a conversation."""
    session_id: str
    query: str
    remaining: list[RankedResult] = field(default_factory=list)
    touched_at: float = 0.0


@dataclass(frozen=True)
class Page:
    """One batch of results handed to the caller."""
    results: list[RankedResult]
    remaining_count: int = 0

    @property
    def has_more(self) -> bool:
        return self.remaining_count > 0

    @classmethod
    def empty(cls) -> "Page":
        return cls(results=[], remaining_count=0)
