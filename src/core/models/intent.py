"""Query intent models."""
from dataclasses import dataclass
from typing import Optional

from .document import ContentType


@dataclass(frozen=True)
class QueryIntent:
    """Advisory tags inferred from the query text."""
    recency: bool = False
    content_type: Optional[ContentType] = None

    @property
    def is_neutral(self) -> bool:
        return not self.recency and self.content_type is None

    @property
    def wants_recent_of_type(self) -> bool:
        return self.recency and self.content_type is not None
