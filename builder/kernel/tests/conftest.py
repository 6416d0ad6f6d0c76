"""
Kernel test configuration.

Kernel tests are synchronous and pure: no database, no network.
"""

import pytest

from builder.kernel.store import DocumentStore
from builder.kernel.templates import get_template, new_blank_document, new_document_from_template


@pytest.fixture
def blank_document():
    return new_blank_document("Test Site")


@pytest.fixture
def store(blank_document):
    """A store holding a blank project (one empty home page)."""
    s = DocumentStore()
    s.set_current_project(blank_document)
    return s


@pytest.fixture
def portfolio_store():
    """A store holding a project seeded from portfolio-3 (5 sections, orders 1-5)."""
    s = DocumentStore()
    s.set_current_project(new_document_from_template(get_template("portfolio-3")))
    return s


@pytest.fixture
def calls(store):
    """Record every notification the `store` fixture emits."""
    seen = []
    store.subscribe(lambda s: seen.append(s))
    return seen
