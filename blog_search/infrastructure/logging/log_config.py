"""Logging setup for blog_search.

The root logger takes ``log_level``. Two categories can be tuned apart from
it: ``http`` covers the httpx request lines and ``search`` covers the
Elasticsearch adapter.
"""

import logging
import sys

from blog_search.config import Settings, get_settings


_FORMAT = "%(levelname)-8s %(name)s: %(message)s"

_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_http": ("httpx", "httpcore"),
    "log_level_search": ("blog_search.infrastructure.elasticsearch",),
}


def setup_logging(settings: Settings | None = None) -> None:
    """Apply root and per-category levels; installs a stderr handler if none exists."""
    settings = settings or get_settings()
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, http=%s, search=%s",
        settings.log_level,
        settings.log_level_http,
        settings.log_level_search,
    )


def _parse_level(raw: str) -> int:
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
