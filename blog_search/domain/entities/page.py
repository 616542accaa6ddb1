"""Paging value objects."""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index plus page size."""

    page: int = 0
    size: int = 10

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")

    @classmethod
    def of(cls, page: int, size: int) -> "PageRequest":
        return cls(page=page, size=size)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest(self.page + 1, self.size)


@dataclass
class Page(Generic[T]):
    """A bounded slice of results plus the total element count."""

    content: list[T] = field(default_factory=list)
    page_request: PageRequest = field(default_factory=PageRequest)
    total_elements: int = 0

    @property
    def number(self) -> int:
        return self.page_request.page

    @property
    def size(self) -> int:
        return self.page_request.size

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_empty(self) -> bool:
        return not self.content

    def __iter__(self):
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)
