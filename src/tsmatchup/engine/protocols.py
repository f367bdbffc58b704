"""Collaborator protocols consumed by the matching engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tsmatchup.engine.models import MatchRecord


@runtime_checkable
class TreeProvider(Protocol):
    """Owns documents and their syntax trees."""

    def has_document(self, document_id: str) -> bool: ...

    def language(self, document_id: str) -> str | None: ...

    def revision(self, document_id: str) -> int: ...

    def parse(self, document_id: str) -> None: ...


@runtime_checkable
class QueryEngine(Protocol):
    """Runs a named ruleset against a document's current tree."""

    def has_ruleset(self, language: str, ruleset: str) -> bool: ...

    def get_matches(self, document_id: str, ruleset: str) -> list[MatchRecord]: ...
