"""Domain entities: plain Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Author:
    """Author embedded in an article. Has no identity of its own."""

    name: str

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name}

    @classmethod
    def from_document(cls, source: dict[str, Any]) -> "Author":
        return cls(name=source.get("name"))


@dataclass
class Article:
    """Core domain entity, the unit of storage in the blog index.

    ``id`` stays ``None`` until the search engine assigns one on first save.
    """

    title: str
    authors: list[Author] = field(default_factory=list)
    id: str | None = None

    def rename(self, title: str) -> None:
        self.title = title

    def to_document(self) -> dict[str, Any]:
        """Convert to the JSON ``_source`` stored by the engine (id excluded)."""
        return {
            "title": self.title,
            "authors": [author.to_document() for author in self.authors or []],
        }

    @classmethod
    def from_document(cls, document_id: str, source: dict[str, Any]) -> "Article":
        """Create an Article from an engine hit / get response."""
        return cls(
            id=document_id,
            title=source.get("title"),
            authors=[Author.from_document(a) for a in source.get("authors") or []],
        )
