"""Integration tests against a live Elasticsearch node (skipped when unreachable).

Point ELASTICSEARCH_URL / ELASTICSEARCH_INDEX at a disposable index: every
test wipes it on teardown.
"""

import httpx
import pytest

from blog_search.config import Settings
from blog_search.domain.entities import Article, Author, PageRequest
from blog_search.domain.exceptions import SearchEngineError
from blog_search.infrastructure.dependencies import (
    build_article_repository,
    build_article_service,
    build_elasticsearch_client,
)
from blog_search.infrastructure.elasticsearch.queries import fuzzy_query, regexp_query
from blog_search.infrastructure.logging.log_config import setup_logging

pytestmark = pytest.mark.integration

JOHN_SMITH = Author("John Smith")
JOHN_DOE = Author("John Doe")


@pytest.fixture
def settings() -> Settings:
    settings = Settings()
    setup_logging(settings)
    return settings


@pytest.fixture
def client(settings: Settings):
    client = build_elasticsearch_client(settings)
    yield client
    client.close()


@pytest.fixture
def repository(settings: Settings, client):
    try:
        repository = build_article_repository(settings, client)
    except (httpx.TransportError, SearchEngineError) as exc:  # pragma: no cover - environment dependent
        pytest.skip(f"Elasticsearch not reachable in this environment: {exc}")

    repository.delete_all()
    repository.save(Article("Spring Data Elasticsearch", [JOHN_SMITH, JOHN_DOE]))
    repository.save(Article("What should we practice next?", [JOHN_DOE]))
    yield repository
    repository.delete_all()


@pytest.fixture(params=["find_by_authors_name", "find_by_authors_name_using_custom_query"])
def find_by_author(request, repository):
    return getattr(repository, request.param)


def test_saved_article_gets_id(repository):
    article = repository.save(Article("Testing is great!", [JOHN_SMITH]))
    assert article.id is not None


def test_search_by_authors_name(find_by_author):
    page = find_by_author(JOHN_DOE.name, PageRequest.of(0, 10))
    assert page.total_elements == 2


def test_search_by_title_regex(repository):
    hits = repository.search(regexp_query("title", ".*practice.*"))
    assert hits.total_hits == 1


def test_updated_title_is_read_back(repository):
    hits = repository.search(fuzzy_query("title", "practice"))
    assert hits.total_hits == 1

    article = hits.get_search_hit(0).content
    article.title = "Exciting new project!"
    repository.save(article)

    assert repository.find_by_id(article.id).title == "Exciting new project!"


def test_deleted_document_is_removed_from_index(repository):
    hits = repository.search(fuzzy_query("title", "practice"))
    assert hits.total_hits == 1
    count = repository.count()

    repository.delete(hits.get_search_hit(0).content)

    assert repository.count() == count - 1
    assert repository.search(fuzzy_query("title", "practice")).total_hits == 0


def test_delete_all_leaves_empty_index(repository):
    repository.delete_all()
    assert repository.count() == 0


def test_service_round_trip(settings: Settings, client, repository):
    service = build_article_service(settings, client)

    page = service.articles_by_author("John Doe", use_custom_query=True)
    assert page.total_elements == 2

    hits = service.search_titles_by_regex(".*practice.*")
    renamed = service.rename_article(hits.get_search_hit(0).id, "Exciting new project!")
    assert service.get_article(renamed.id).title == "Exciting new project!"
