"""Abstract repository interfaces (ports): the contract, not the implementation."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from blog_search.domain.entities import Article, Page, PageRequest, SearchHits


class ArticleRepository(ABC):
    """Port for article persistence and lookup, implemented in the infrastructure layer."""

    @abstractmethod
    def save(self, article: Article) -> Article:
        """Insert or fully replace an article; returns it with the id populated."""
        ...

    @abstractmethod
    def save_all(self, articles: Iterable[Article]) -> list[Article]:
        ...

    @abstractmethod
    def find_by_id(self, article_id: str) -> Article | None:
        """Exact lookup by identifier. Returns None when absent."""
        ...

    @abstractmethod
    def exists_by_id(self, article_id: str) -> bool:
        ...

    @abstractmethod
    def find_all(self, page_request: PageRequest) -> Page[Article]:
        ...

    @abstractmethod
    def count(self) -> int:
        """Total number of articles currently stored."""
        ...

    @abstractmethod
    def delete(self, article: Article) -> None:
        """Remove the given article by identity."""
        ...

    @abstractmethod
    def delete_by_id(self, article_id: str) -> None:
        ...

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every article."""
        ...

    @abstractmethod
    def find_by_authors_name(self, name: str, page_request: PageRequest) -> Page[Article]:
        """Articles with at least one author whose name matches (derived from the method name)."""
        ...

    @abstractmethod
    def find_by_authors_name_using_custom_query(
        self, name: str, page_request: PageRequest
    ) -> Page[Article]:
        """Same result as find_by_authors_name, expressed as an explicit query template."""
        ...

    @abstractmethod
    def search(
        self, query: dict[str, Any], page_request: PageRequest | None = None
    ) -> SearchHits[Article]:
        """Run an arbitrary engine query against the article index."""
        ...
