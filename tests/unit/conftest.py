"""Shared test fixtures and constants for unit tests."""

import logging

import pytest

from i18n_accessor.core.config import clear_config_cache
from i18n_accessor.tree import PluralForms, build_tree

# Nested translations used across accessor, validator and CLI tests.
# Mirrors locales/en.yml with a few extra shapes (empty branch, deep branch).
TRANSLATIONS = {
    "errors": {
        "not_found": "missing",
        "permission_denied": "You do not have access to %1",
    },
    "items": {
        "count": PluralForms({0: "no items", 1: "one item", "n": "many items"}),
    },
    "status": {"ok": "done"},
    "empty": {},
    "deep": {"a": {"b": {"c": "bottom"}}},
}

# `count` holds plural forms without the '!!pl' marker
MALFORMED_TRANSLATIONS = {
    "errors": {
        "not_found": "missing",
        "count": {1: "one item", 5: "many items"},
    },
}

EN_YAML = """\
errors:
  not_found: "missing"
items:
  count: !!pl
    0: "no items"
    1: "one item"
    n: "many items"
"""

MALFORMED_YAML = """\
errors:
  not_found: "missing"
  count:
    1: "one item"
    5: "many items"
"""


@pytest.fixture
def tree():
    return build_tree(TRANSLATIONS, locale="en")


@pytest.fixture
def malformed_tree():
    return build_tree(MALFORMED_TRANSLATIONS, locale="en")


@pytest.fixture(autouse=True)
def _reset_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def en_file(tmp_path):
    path = tmp_path / "en.yml"
    path.write_text(EN_YAML, encoding="utf-8")
    return path


@pytest.fixture
def malformed_file(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text(MALFORMED_YAML, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("i18n_accessor")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
