"""Per-revision inventory of delimiter candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tsmatchup.core.logging import get_logger
from tsmatchup.engine.models import ActiveNodeSet

if TYPE_CHECKING:
    from tsmatchup.engine.protocols import QueryEngine, TreeProvider

log = get_logger("engine.active_nodes")


class ActiveNodeIndex:
    """Builds and memoizes the active node set of each document.

    The memo is keyed by ``(document_id, revision)``: a revision bump on the
    tree provider makes the next ``compute`` rebuild, and ``invalidate``
    drops a document explicitly.
    """

    def __init__(self, trees: TreeProvider, queries: QueryEngine, ruleset: str = "matchup"):
        self._trees = trees
        self._queries = queries
        self._ruleset = ruleset
        self._memo: dict[str, tuple[int, ActiveNodeSet]] = {}

    def compute(self, document_id: str) -> ActiveNodeSet:
        revision = self._trees.revision(document_id)
        cached = self._memo.get(document_id)
        if cached is not None and cached[0] == revision:
            return cached[1]

        # Matches must come from the current tree
        self._trees.parse(document_id)
        active = ActiveNodeSet()
        for record in self._queries.get_matches(document_id, self._ruleset):
            for tag in record.tagged():
                if active.add(tag):
                    continue
                node_id = tag.node.identity()
                if active.symbols[node_id] != tag.key or active.sides[node_id] != tag.side:
                    # First tag wins; later conflicting tags depend on match order
                    log.debug(
                        "delimiter_tag_conflict",
                        document_id=document_id,
                        node=str(node_id),
                        kept=(active.sides[node_id].value, active.symbols[node_id]),
                        dropped=(tag.side.value, tag.key),
                    )

        self._memo[document_id] = (revision, active)
        log.debug(
            "active_nodes_computed",
            document_id=document_id,
            revision=revision,
            open=len(active.open),
            mid=len(active.mid),
            close=len(active.close),
        )
        return active

    def invalidate(self, document_id: str | None = None) -> None:
        """Forget the memoized set of one document, or of all documents."""
        if document_id is None:
            self._memo.clear()
        else:
            self._memo.pop(document_id, None)
