"""Elasticsearch REST client: a thin synchronous wrapper over the document and search APIs.

Every method issues exactly one HTTP request with httpx. Error responses are
raised as SearchEngineError; connection failures propagate as httpx
transport errors.
"""

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from blog_search.domain.exceptions import SearchEngineError

logger = logging.getLogger(__name__)


class ElasticsearchClient:
    """Infrastructure adapter for one Elasticsearch cluster.

    Pass ``http_client`` to reuse a configured ``httpx.Client`` (tests inject
    one backed by ``httpx.MockTransport``); otherwise a pooled client is
    created and owned by this instance.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:9200",
        *,
        username: str = "",
        password: str = "",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        if http_client is None:
            auth = (username, password) if username else None
            http_client = httpx.Client(timeout=timeout, auth=auth)
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _url(self, *parts: str) -> str:
        """Join path segments, percent-encoding each so ids cannot change the path."""
        return "/".join([self._base_url, *(quote(part, safe="") for part in parts)])

    @staticmethod
    def _refresh_param(refresh: bool) -> dict[str, str]:
        return {"refresh": "true"} if refresh else {}

    # ── Documents ────────────────────────────────────────────────────

    def index_document(
        self,
        index: str,
        document: dict[str, Any],
        *,
        document_id: str | None = None,
        refresh: bool = False,
    ) -> dict[str, Any]:
        """Index a document. Without an id the engine assigns one."""
        params = self._refresh_param(refresh)
        if document_id is None:
            response = self._http_client.post(
                self._url(index, "_doc"), headers=self._get_headers(), params=params, json=document
            )
        else:
            response = self._http_client.put(
                self._url(index, "_doc", document_id),
                headers=self._get_headers(),
                params=params,
                json=document,
            )
        self._raise_for_error(response)
        return response.json()

    def get_document(self, index: str, document_id: str) -> dict[str, Any] | None:
        """Fetch a document by id. Returns None when it does not exist."""
        response = self._http_client.get(
            self._url(index, "_doc", document_id), headers=self._get_headers()
        )
        if response.status_code == 404 and not self._is_missing_index(response):
            return None
        self._raise_for_error(response)
        return response.json()

    def delete_document(
        self, index: str, document_id: str, *, refresh: bool = False
    ) -> bool:
        """Delete a document by id. Returns False when it did not exist."""
        response = self._http_client.delete(
            self._url(index, "_doc", document_id),
            headers=self._get_headers(),
            params=self._refresh_param(refresh),
        )
        if response.status_code == 404 and not self._is_missing_index(response):
            return False
        self._raise_for_error(response)
        return True

    def delete_by_query(
        self, index: str, query: dict[str, Any], *, refresh: bool = False
    ) -> int:
        """Delete every document matching ``query``; returns the number deleted."""
        params = {"conflicts": "proceed", **self._refresh_param(refresh)}
        response = self._http_client.post(
            self._url(index, "_delete_by_query"),
            headers=self._get_headers(),
            params=params,
            json={"query": query},
        )
        self._raise_for_error(response)
        return response.json().get("deleted", 0)

    # ── Search ───────────────────────────────────────────────────────

    def count(self, index: str, query: dict[str, Any] | None = None) -> int:
        body = {"query": query} if query is not None else None
        response = self._http_client.post(
            self._url(index, "_count"), headers=self._get_headers(), json=body
        )
        self._raise_for_error(response)
        return response.json()["count"]

    def search(
        self,
        index: str,
        query: dict[str, Any] | str,
        *,
        from_: int = 0,
        size: int = 10,
    ) -> dict[str, Any]:
        """Run a search and return the raw response.

        ``query`` is either a query DSL dict or an already rendered JSON
        string, which is sent unchanged so the engine reports any syntax
        error in it.
        """
        query_json = query if isinstance(query, str) else json.dumps(query)
        body = (
            f'{{"query": {query_json}, "from": {from_:d}, "size": {size:d}, '
            f'"track_total_hits": true}}'
        )
        response = self._http_client.post(
            self._url(index, "_search"),
            headers=self._get_headers(),
            content=body.encode("utf-8"),
        )
        self._raise_for_error(response)
        return response.json()

    # ── Index management ─────────────────────────────────────────────

    def index_exists(self, index: str) -> bool:
        response = self._http_client.head(self._url(index), headers=self._get_headers())
        if response.status_code == 404:
            return False
        self._raise_for_error(response)
        return True

    def create_index(
        self,
        index: str,
        mappings: dict[str, Any],
        settings: dict[str, Any] | None = None,
    ) -> None:
        body: dict[str, Any] = {"mappings": mappings}
        if settings:
            body["settings"] = settings
        response = self._http_client.put(
            self._url(index), headers=self._get_headers(), json=body
        )
        self._raise_for_error(response)
        logger.info("Created index '%s'", index)

    def refresh(self, index: str) -> None:
        response = self._http_client.post(
            self._url(index, "_refresh"), headers=self._get_headers()
        )
        self._raise_for_error(response)

    # ── Lifecycle ────────────────────────────────────────────────────

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "ElasticsearchClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Errors ───────────────────────────────────────────────────────

    @staticmethod
    def _is_missing_index(response: httpx.Response) -> bool:
        """A 404 caused by a missing index rather than a missing document."""
        try:
            error = response.json().get("error")
        except ValueError:
            return False
        return isinstance(error, dict) and error.get("type") == "index_not_found_exception"

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Raise SearchEngineError for any non-2xx response."""
        if response.is_success:
            return

        error_type = "http_error"
        reason = response.text
        try:
            error = response.json().get("error")
        except ValueError:
            error = None
        if isinstance(error, dict):
            error_type = error.get("type", error_type)
            reason = error.get("reason", reason)
        elif isinstance(error, str):
            reason = error

        logger.debug(
            "Elasticsearch %s %s failed: %s %s",
            response.request.method,
            response.request.url,
            response.status_code,
            reason,
        )
        raise SearchEngineError(
            status_code=response.status_code,
            error_type=error_type,
            reason=reason,
        )
