"""Scope lookup: the construct a delimiter belongs to."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsmatchup.engine.models import NodeId, SyntaxNode
    from tsmatchup.engine.protocols import QueryEngine


class ScopeResolver:
    """Finds the nearest registered scope of a symbol key above a node.

    Scopes are read from the query results on every call.
    """

    def __init__(self, queries: QueryEngine, ruleset: str = "matchup"):
        self._queries = queries
        self._ruleset = ruleset

    def scopes(self, document_id: str) -> dict[str, list[SyntaxNode]]:
        """All scope nodes of the document, grouped by symbol key."""
        scopes: dict[str, list[SyntaxNode]] = {}
        for record in self._queries.get_matches(document_id, self._ruleset):
            for key, node in record.scope.items():
                scopes.setdefault(key, []).append(node)
        return scopes

    def containing_scope(
        self, node: SyntaxNode | None, document_id: str, key: str
    ) -> SyntaxNode | None:
        """Return ``node`` or its closest ancestor registered as a ``key`` scope."""
        if node is None:
            return None
        candidates = self.scopes(document_id).get(key)
        if not candidates:
            return None
        scope_ids: set[NodeId] = {scope.identity() for scope in candidates}

        current: SyntaxNode | None = node
        while current is not None:
            if current.identity() in scope_ids:
                return current
            current = current.parent()
        return None
