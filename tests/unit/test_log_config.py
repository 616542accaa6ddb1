"""Unit tests for the logging setup."""

import logging

import pytest

from blog_search.config import Settings
from blog_search.infrastructure.logging.log_config import _parse_level, setup_logging


@pytest.fixture(autouse=True)
def restore_levels():
    names = ["", "httpx", "httpcore", "blog_search.infrastructure.elasticsearch"]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_setup_logging_applies_category_levels():
    setup_logging(
        Settings(_env_file=None, log_level="DEBUG", log_level_http="ERROR", log_level_search="WARNING")
    )

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.ERROR
    assert logging.getLogger("httpcore").level == logging.ERROR
    assert logging.getLogger("blog_search.infrastructure.elasticsearch").level == logging.WARNING


def test_parse_level_defaults_to_info():
    assert _parse_level("warning") == logging.WARNING
    assert _parse_level("chatty") == logging.INFO
