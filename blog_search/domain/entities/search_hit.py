"""Search hit entities: raw engine matches with their relevance scores."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class SearchHit(Generic[T]):
    """A single document matched by a search, with its score."""

    id: str
    content: T
    score: float | None = None


@dataclass
class SearchHits(Generic[T]):
    """All hits returned by one search request."""

    total_hits: int = 0
    max_score: float | None = None
    hits: list[SearchHit[T]] = field(default_factory=list)

    def get_search_hit(self, index: int) -> SearchHit[T]:
        return self.hits[index]

    def contents(self) -> list[T]:
        return [hit.content for hit in self.hits]

    def __len__(self) -> int:
        return len(self.hits)
