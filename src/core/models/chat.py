"""Chat domain models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .session import Page


class ContinuationSignal(Enum):
    """Reply to a pending "show more" offer."""
    AFFIRMATIVE = "affirmative"
    NEGATIVE = "negative"
    NONE = "none"


class TurnKind(Enum):
    RESULTS = "results"            # fresh query
    CONTINUATION = "continuation"  # next page of a pending query
    DECLINED = "declined"          # user passed on the remainder


@dataclass(frozen=True)
class SourceRef:
    name: str
    url: Optional[str] = None


@dataclass
class ChatTurn:
    """What the response layer receives for one user message."""
    kind: TurnKind
    query: str
    page: Page = field(default_factory=Page.empty)
    context: str = ""
    sources: list[SourceRef] = field(default_factory=list)

    @property
    def has_more(self) -> bool:
        return self.page.has_more

    @property
    def remaining_count(self) -> int:
        return self.page.remaining_count
