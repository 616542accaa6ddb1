"""Wires infrastructure to the application layer from explicit settings."""

from blog_search.application.services import ArticleService
from blog_search.config import Settings
from blog_search.infrastructure.elasticsearch import (
    ElasticsearchArticleRepository,
    ElasticsearchClient,
)


def build_elasticsearch_client(settings: Settings) -> ElasticsearchClient:
    return ElasticsearchClient(
        base_url=settings.elasticsearch_url,
        username=settings.elasticsearch_username,
        password=settings.elasticsearch_password,
        timeout=settings.elasticsearch_timeout,
    )


def build_article_repository(
    settings: Settings,
    client: ElasticsearchClient | None = None,
) -> ElasticsearchArticleRepository:
    """Provides a repository bound to the configured index, creating the index if needed."""
    repository = ElasticsearchArticleRepository(
        client or build_elasticsearch_client(settings),
        index=settings.elasticsearch_index,
        refresh=settings.elasticsearch_refresh,
    )
    repository.ensure_index()
    return repository


def build_article_service(
    settings: Settings,
    client: ElasticsearchClient | None = None,
) -> ArticleService:
    """Provides an ArticleService instance with its repository wired up."""
    return ArticleService(build_article_repository(settings, client))
