"""Query construction for the Elasticsearch query DSL.

Three ways of producing a query body:

* builder functions (``match_query``, ``regexp_query``, ...) for ad-hoc search;
* ``DerivedQuery`` parses a finder name such as ``find_by_authors_name``
  into criteria resolved against the index mapping;
* ``render_query_template`` substitutes positional ``?0``, ``?1`` ...
  placeholders in an explicit JSON template.

Derived criteria go through ``field_query`` so the matching strategy always
follows the declared field type (analysed ``match`` for text, exact ``term``
for keywords) and fields of nested objects are matched one object at a time.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from blog_search.infrastructure.elasticsearch.mappings import (
    ID_FIELD,
    KEYWORD,
    NESTED,
    child_properties,
    field_type,
    nested_path,
)

_PLACEHOLDER = re.compile(r"\?(\d+)")
_PREFIX = "find_by_"


# ── Builders ─────────────────────────────────────────────────────────


def match_all_query() -> dict[str, Any]:
    return {"match_all": {}}


def match_query(field: str, value: Any, operator: str = "and") -> dict[str, Any]:
    """Analysed full-text match; every token must match with operator ``and``."""
    return {"match": {field: {"query": value, "operator": operator}}}


def term_query(field: str, value: Any) -> dict[str, Any]:
    if field == ID_FIELD:
        return {"ids": {"values": [value]}}
    return {"term": {field: {"value": value}}}


def regexp_query(field: str, pattern: str) -> dict[str, Any]:
    return {"regexp": {field: {"value": pattern}}}


def fuzzy_query(field: str, value: str, fuzziness: str | int = "AUTO") -> dict[str, Any]:
    return {"fuzzy": {field: {"value": value, "fuzziness": fuzziness}}}


def nested_query(path: str, query: dict[str, Any]) -> dict[str, Any]:
    return {"nested": {"path": path, "query": query}}


def bool_query(
    *,
    must: list[dict[str, Any]] | None = None,
    should: list[dict[str, Any]] | None = None,
    filter: list[dict[str, Any]] | None = None,
    must_not: list[dict[str, Any]] | None = None,
    minimum_should_match: int | None = None,
) -> dict[str, Any]:
    clauses: dict[str, Any] = {}
    if must:
        clauses["must"] = must
    if should:
        clauses["should"] = should
    if filter:
        clauses["filter"] = filter
    if must_not:
        clauses["must_not"] = must_not
    if minimum_should_match is not None:
        clauses["minimum_should_match"] = minimum_should_match
    return {"bool": clauses}


def field_query(mapping: dict[str, Any], path: str, value: Any) -> dict[str, Any]:
    """Build the query matching ``value`` on ``path`` according to its mapped type."""
    declared = field_type(mapping, path)
    if declared is None:
        raise ValueError(f"Field '{path}' is not mapped")
    if declared == KEYWORD:
        query = term_query(path, value)
    else:
        query = match_query(path, value)
    enclosing = nested_path(mapping, path)
    if enclosing is not None:
        return nested_query(enclosing, query)
    return query


# ── Derived queries ──────────────────────────────────────────────────


@dataclass(frozen=True)
class DerivedQuery:
    """Query derived from a repository method name.

    ``find_by_authors_name`` resolves to one criterion on ``authors.name``.
    Criteria are joined with ``_and_`` and alternatives with ``_or_``; each
    criterion consumes one positional argument, left to right.
    """

    method_name: str
    # Each inner tuple is an AND group; groups are OR-ed together
    groups: tuple[tuple[str, ...], ...]
    mapping: dict[str, Any]

    @classmethod
    def parse(cls, method_name: str, mapping: dict[str, Any]) -> "DerivedQuery":
        if not method_name.startswith(_PREFIX):
            raise ValueError(
                f"Cannot derive a query from '{method_name}': "
                f"expected a name starting with '{_PREFIX}'"
            )
        criteria = method_name[len(_PREFIX):]
        if not criteria:
            raise ValueError(f"Cannot derive a query from '{method_name}': no criteria")

        groups = tuple(
            tuple(_resolve_property(part, mapping, method_name) for part in alternative.split("_and_"))
            for alternative in criteria.split("_or_")
        )
        return cls(
            method_name=method_name,
            groups=groups,
            mapping=mapping,
        )

    @property
    def parameter_count(self) -> int:
        return sum(len(group) for group in self.groups)

    def build(self, *args: Any) -> dict[str, Any]:
        """Bind the positional arguments and return the query body."""
        if len(args) != self.parameter_count:
            raise TypeError(
                f"{self.method_name}() takes {self.parameter_count} query "
                f"argument(s) but {len(args)} were given"
            )
        values = iter(args)
        alternatives = [
            [field_query(self.mapping, path, next(values)) for path in group]
            for group in self.groups
        ]
        if len(alternatives) == 1:
            return bool_query(must=alternatives[0])
        return bool_query(
            should=[bool_query(must=group) for group in alternatives],
            minimum_should_match=1,
        )


def _resolve_property(part: str, mapping: dict[str, Any], method_name: str) -> str:
    """Resolve ``authors_name`` to the dotted path ``authors.name``.

    Matching is greedy so multi-word properties (``created_at``) win over a
    shorter prefix.
    """
    tokens = part.split("_")
    path: list[str] = []
    while tokens:
        properties = child_properties(mapping, ".".join(path))
        for end in range(len(tokens), 0, -1):
            candidate = "_".join(tokens[:end])
            if candidate in properties:
                path.append(candidate)
                tokens = tokens[end:]
                break
        else:
            raise ValueError(
                f"Cannot derive a query from '{method_name}': "
                f"no property '{'_'.join(tokens)}' under '{'.'.join(path) or 'Article'}'"
            )
    resolved = ".".join(path)
    if field_type(mapping, resolved) == NESTED:
        raise ValueError(
            f"Cannot derive a query from '{method_name}': "
            f"'{resolved}' is an object, name one of its properties"
        )
    return resolved


# ── Query templates ──────────────────────────────────────────────────


def render_query_template(template: str, *params: Any) -> str:
    """Substitute ``?N`` placeholders with the JSON-escaped N-th parameter.

    The result is not parsed; an invalid template is left for the engine to
    reject.
    """

    def substitute(match: re.Match) -> str:
        index = int(match.group(1))
        if index >= len(params):
            raise ValueError(
                f"Query template references ?{index} but only {len(params)} parameter(s) given"
            )
        value = params[index]
        text = value if isinstance(value, str) else json.dumps(value)
        return json.dumps(text)[1:-1]

    return _PLACEHOLDER.sub(substitute, template)
