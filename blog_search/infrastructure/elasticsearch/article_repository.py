"""Concrete repository implementation backed by an Elasticsearch index."""

import logging
from collections.abc import Iterable
from typing import Any

from blog_search.application.interfaces import ArticleRepository
from blog_search.domain.entities import (
    Article,
    Page,
    PageRequest,
    SearchHit,
    SearchHits,
)
from blog_search.infrastructure.elasticsearch.elasticsearch_client import ElasticsearchClient
from blog_search.infrastructure.elasticsearch.mappings import ARTICLE_MAPPING
from blog_search.infrastructure.elasticsearch.queries import (
    DerivedQuery,
    match_all_query,
    render_query_template,
)

logger = logging.getLogger(__name__)

FIND_BY_AUTHORS_NAME = DerivedQuery.parse("find_by_authors_name", ARTICLE_MAPPING)

AUTHORS_NAME_QUERY_TEMPLATE = (
    '{"bool": {"must": [{"nested": {"path": "authors", "query": '
    '{"match": {"authors.name": {"query": "?0", "operator": "and"}}}}}]}}'
)

_DEFAULT_SEARCH_PAGE = PageRequest(page=0, size=10)


class ElasticsearchArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port against one Elasticsearch index."""

    def __init__(
        self,
        client: ElasticsearchClient,
        index: str = "blog",
        *,
        refresh: bool = True,
    ):
        self._client = client
        self._index = index
        self._refresh = refresh

    @property
    def index(self) -> str:
        return self._index

    def ensure_index(self) -> bool:
        """Create the index with the article mapping if missing. Returns True when created."""
        if self._client.index_exists(self._index):
            return False
        self._client.create_index(self._index, ARTICLE_MAPPING)
        return True

    # ── Persistence ──────────────────────────────────────────────────

    def save(self, article: Article) -> Article:
        result = self._client.index_document(
            self._index,
            article.to_document(),
            document_id=article.id,
            refresh=self._refresh,
        )
        article.id = result["_id"]
        logger.debug("Saved article %s (%s)", article.id, result.get("result"))
        return article

    def save_all(self, articles: Iterable[Article]) -> list[Article]:
        return [self.save(article) for article in articles]

    def find_by_id(self, article_id: str) -> Article | None:
        if not article_id:
            return None
        result = self._client.get_document(self._index, article_id)
        if result is None or not result.get("found", True):
            return None
        return Article.from_document(result["_id"], result["_source"])

    def exists_by_id(self, article_id: str) -> bool:
        return self.find_by_id(article_id) is not None

    def find_all(self, page_request: PageRequest) -> Page[Article]:
        return self._search_page(match_all_query(), page_request)

    def count(self) -> int:
        return self._client.count(self._index)

    def delete(self, article: Article) -> None:
        if article.id is None:
            raise ValueError("Cannot delete an article that has not been saved")
        self.delete_by_id(article.id)

    def delete_by_id(self, article_id: str) -> None:
        if not article_id:
            logger.debug("Empty article id, nothing deleted")
            return
        deleted = self._client.delete_document(
            self._index, article_id, refresh=self._refresh
        )
        if deleted:
            logger.debug("Deleted article %s", article_id)
        else:
            logger.debug("Article %s not found, nothing deleted", article_id)

    def delete_all(self) -> None:
        deleted = self._client.delete_by_query(
            self._index, match_all_query(), refresh=self._refresh
        )
        logger.debug("Deleted %d article(s) from '%s'", deleted, self._index)

    # ── Queries ──────────────────────────────────────────────────────

    def find_by_authors_name(self, name: str, page_request: PageRequest) -> Page[Article]:
        return self._search_page(FIND_BY_AUTHORS_NAME.build(name), page_request)

    def find_by_authors_name_using_custom_query(
        self, name: str, page_request: PageRequest
    ) -> Page[Article]:
        query = render_query_template(AUTHORS_NAME_QUERY_TEMPLATE, name)
        return self._search_page(query, page_request)

    def search(
        self, query: dict[str, Any], page_request: PageRequest | None = None
    ) -> SearchHits[Article]:
        return self._search_hits(query, page_request or _DEFAULT_SEARCH_PAGE)

    def _search_page(self, query: dict[str, Any] | str, page_request: PageRequest) -> Page[Article]:
        """Shared by every paged finder so they cannot diverge."""
        hits = self._search_hits(query, page_request)
        return Page(
            content=hits.contents(),
            page_request=page_request,
            total_elements=hits.total_hits,
        )

    def _search_hits(
        self, query: dict[str, Any] | str, page_request: PageRequest
    ) -> SearchHits[Article]:
        response = self._client.search(
            self._index,
            query,
            from_=page_request.offset,
            size=page_request.size,
        )
        return self._to_search_hits(response)

    @staticmethod
    def _to_search_hits(response: dict[str, Any]) -> SearchHits[Article]:
        """Map an engine search response to domain search hits."""
        hits = response.get("hits", {})
        total = hits.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)
        return SearchHits(
            total_hits=total,
            max_score=hits.get("max_score"),
            hits=[
                SearchHit(
                    id=hit["_id"],
                    score=hit.get("_score"),
                    content=Article.from_document(hit["_id"], hit.get("_source", {})),
                )
                for hit in hits.get("hits", [])
            ],
        )
