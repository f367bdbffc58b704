"""Shared fixtures for tree-sitter adapter tests."""

from __future__ import annotations

import pytest

from tsmatchup.treesitter.documents import DocumentStore
from tsmatchup.treesitter.query import TreeSitterQueryEngine

PYTHON_IF = "if a:\n    x = 1\nelif b:\n    x = 2\nelse:\n    x = 3\n"


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def query_engine(store: DocumentStore) -> TreeSitterQueryEngine:
    return TreeSitterQueryEngine(store)


@pytest.fixture
def python_doc(store: DocumentStore) -> str:
    store.open("py", PYTHON_IF, "python")
    return "py"
