from .article import ArticleCreate, ArticleResponse, ArticleUpdate, AuthorSchema

__all__ = [
    "ArticleCreate",
    "ArticleResponse",
    "ArticleUpdate",
    "AuthorSchema",
]
