"""Application service (use case) for Article operations."""

from blog_search.application.interfaces import ArticleRepository
from blog_search.application.schemas import ArticleCreate, ArticleUpdate
from blog_search.domain.entities import Article, Author, Page, PageRequest, SearchHits
from blog_search.domain.exceptions import EntityNotFoundError
from blog_search.infrastructure.elasticsearch.queries import fuzzy_query, regexp_query


class ArticleService:
    """Orchestrates article use cases. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    def get_article(self, article_id: str) -> Article:
        article = self._repository.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    def create_article(self, data: ArticleCreate) -> Article:
        article = Article(
            title=data.title,
            authors=[Author(name=author.name) for author in data.authors],
        )
        return self._repository.save(article)

    def update_article(self, article_id: str, data: ArticleUpdate) -> Article:
        article = self.get_article(article_id)
        if data.title is not None:
            article.rename(data.title)
        if data.authors is not None:
            article.authors = [Author(name=author.name) for author in data.authors]
        return self._repository.save(article)

    def rename_article(self, article_id: str, title: str) -> Article:
        return self.update_article(article_id, ArticleUpdate(title=title))

    def delete_article(self, article_id: str) -> None:
        article = self.get_article(article_id)
        self._repository.delete(article)

    def count_articles(self) -> int:
        return self._repository.count()

    def clear(self) -> None:
        self._repository.delete_all()

    def articles_by_author(
        self,
        name: str,
        page: int = 0,
        size: int = 10,
        *,
        use_custom_query: bool = False,
    ) -> Page[Article]:
        page_request = PageRequest.of(page, size)
        if use_custom_query:
            return self._repository.find_by_authors_name_using_custom_query(name, page_request)
        return self._repository.find_by_authors_name(name, page_request)

    def search_titles_by_regex(self, pattern: str) -> SearchHits[Article]:
        return self._repository.search(regexp_query("title", pattern))

    def search_titles_fuzzy(self, term: str) -> SearchHits[Article]:
        return self._repository.search(fuzzy_query("title", term))
