"""Elasticsearch infrastructure package."""

from .article_repository import ElasticsearchArticleRepository
from .elasticsearch_client import ElasticsearchClient

__all__ = ["ElasticsearchArticleRepository", "ElasticsearchClient"]
