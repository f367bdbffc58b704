"""In-memory documents with revision tracking and lazy parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import tree_sitter

from tsmatchup.core.errors import DocumentError
from tsmatchup.core.logging import get_logger
from tsmatchup.treesitter.grammars import load_language

log = get_logger("treesitter.documents")


@dataclass
class _Document:
    language: str
    source: bytes
    revision: int = 0
    tree: Any = None  # tree_sitter.Tree
    parsed_revision: int = -1


def _to_bytes(source: str | bytes) -> bytes:
    return source.encode("utf-8") if isinstance(source, str) else source


class DocumentStore:
    """Tree provider over documents held in memory.

    Revisions come from one store-wide counter, so an id that is closed and
    re-opened never reuses a revision. The tree is re-parsed on the next
    ``parse`` or ``tree`` call after a change.
    """

    def __init__(self) -> None:
        self._documents: dict[str, _Document] = {}
        self._parsers: dict[str, tree_sitter.Parser] = {}
        self._clock = 0

    def _get(self, document_id: str) -> _Document:
        doc = self._documents.get(document_id)
        if doc is None:
            raise DocumentError.not_found(document_id)
        return doc

    def open(self, document_id: str, source: str | bytes, language: str) -> None:
        """Register a document. Re-opening an id replaces it with a newer revision."""
        self._documents[document_id] = _Document(language, _to_bytes(source), self._tick())

    def update(self, document_id: str, source: str | bytes) -> int:
        """Replace a document's text. Returns the new revision."""
        doc = self._get(document_id)
        doc.source = _to_bytes(source)
        doc.revision = self._tick()
        return doc.revision

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    def close(self, document_id: str) -> None:
        self._documents.pop(document_id, None)

    def has_document(self, document_id: str) -> bool:
        return document_id in self._documents

    def language(self, document_id: str) -> str | None:
        doc = self._documents.get(document_id)
        return doc.language if doc is not None else None

    def revision(self, document_id: str) -> int:
        return self._get(document_id).revision

    def source(self, document_id: str) -> bytes:
        return self._get(document_id).source

    def parse(self, document_id: str) -> None:
        doc = self._get(document_id)
        if doc.tree is not None and doc.parsed_revision == doc.revision:
            return
        doc.tree = self._parser(doc.language).parse(doc.source)
        doc.parsed_revision = doc.revision
        log.debug("document_parsed", document_id=document_id, revision=doc.revision)

    def tree(self, document_id: str) -> tree_sitter.Tree:
        self.parse(document_id)
        return self._documents[document_id].tree

    def _parser(self, language: str) -> tree_sitter.Parser:
        parser = self._parsers.get(language)
        if parser is None:
            parser = tree_sitter.Parser(load_language(language))
            self._parsers[language] = parser
        return parser
