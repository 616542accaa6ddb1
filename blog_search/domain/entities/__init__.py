from .article import Article, Author
from .page import Page, PageRequest
from .search_hit import SearchHit, SearchHits

__all__ = [
    "Article",
    "Author",
    "Page",
    "PageRequest",
    "SearchHit",
    "SearchHits",
]
