"""Index mapping for the blog index. Declares how each Article field is indexed.

The engine evaluates this declaration once, when the index is created.
``title`` and ``authors.name`` are analysed full-text fields; ``id`` is the
document ``_id`` and matches exactly. ``authors`` is nested, so a criterion
on one of its fields is evaluated against each author on its own. It is also
copied into the parent document for ad-hoc searches that pool every author.
"""

from typing import Any

TEXT = "text"
KEYWORD = "keyword"
NESTED = "nested"

ID_FIELD = "id"

ARTICLE_MAPPING: dict[str, Any] = {
    "properties": {
        "title": {
            "type": TEXT,
            "fields": {"verbatim": {"type": KEYWORD}},
        },
        "authors": {
            "type": NESTED,
            "include_in_parent": True,
            "properties": {
                "name": {"type": TEXT},
            },
        },
    }
}


def field_type(mapping: dict[str, Any], path: str) -> str | None:
    """Return the declared type of a dotted field path, or None if unmapped."""
    if path == ID_FIELD:
        return KEYWORD

    node: dict[str, Any] = {"properties": mapping["properties"]}
    for part in path.split("."):
        children = node.get("properties") or node.get("fields") or {}
        if part not in children:
            return None
        node = children[part]
    return node.get("type", "object")


def child_properties(mapping: dict[str, Any], path: str = "") -> dict[str, Any]:
    """Return the sub-properties declared under ``path`` (root when empty)."""
    node: dict[str, Any] = {"properties": mapping["properties"]}
    if path:
        for part in path.split("."):
            node = (node.get("properties") or {}).get(part, {})
    properties = dict(node.get("properties") or {})
    if not path:
        properties[ID_FIELD] = {"type": KEYWORD}
    return properties


def nested_path(mapping: dict[str, Any], path: str) -> str | None:
    """Return the innermost nested object enclosing ``path``, or None."""
    parts = path.split(".")
    enclosing = None
    for end in range(1, len(parts)):
        prefix = ".".join(parts[:end])
        if field_type(mapping, prefix) == NESTED:
            enclosing = prefix
    return enclosing
