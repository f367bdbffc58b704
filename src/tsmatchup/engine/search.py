"""Find the delimiters that complete a located construct."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tsmatchup.core.logging import get_logger
from tsmatchup.engine.models import MatchEntry, Position, Side

if TYPE_CHECKING:
    from tsmatchup.engine.active_nodes import ActiveNodeIndex
    from tsmatchup.engine.cache import MatchResultCache
    from tsmatchup.engine.models import MatchContext, SyntaxNode
    from tsmatchup.engine.scopes import ScopeResolver

log = get_logger("engine.search")


def _search_sides(forward: bool, suppress_mids: bool) -> tuple[Side, ...]:
    if suppress_mids:
        return (Side.CLOSE,) if forward else (Side.OPEN,)
    return (Side.MID, Side.CLOSE) if forward else (Side.MID, Side.OPEN)


def _beyond(pos: Position, origin: Position, forward: bool) -> bool:
    return pos > origin if forward else pos < origin


class MatchingSearch:
    """Completes a construct from a cached locate result."""

    def __init__(self, index: ActiveNodeIndex, scopes: ScopeResolver, cache: MatchResultCache):
        self._index = index
        self._scopes = scopes
        self._cache = cache

    def get_matching(
        self,
        descriptor_id: str,
        forward: bool,
        document_id: str,
        suppress_mids: bool = False,
    ) -> list[MatchEntry]:
        """Delimiters of the same construct on the requested side of the origin.

        A forward search that finds no close delimiter ends with an empty-text
        entry at the scope's end.
        """
        info = self._cache.get(descriptor_id)
        if info is None:
            log.debug("match_context_missing", descriptor_id=descriptor_id)
            return []
        if info.document_id != document_id:
            log.debug(
                "match_context_document_mismatch",
                descriptor_id=descriptor_id,
                expected=info.document_id,
                got=document_id,
            )
            return []

        active = self._index.compute(document_id)
        matches: list[MatchEntry] = []
        got_close = False
        for side in _search_sides(forward, suppress_mids):
            for node in active.nodes(side):
                if not self._accepts(node, active.key_of(node), info, forward, document_id):
                    continue
                start = node.start()
                matches.append(MatchEntry(node.text(), start.row + 1, start.column + 1))
                if side is Side.CLOSE:
                    got_close = True

        matches.sort(key=lambda m: (m.line, m.column))

        if forward and not got_close:
            end = info.scope.end()
            matches.append(MatchEntry("", end.row + 1, end.column + 1))
        return matches

    def _accepts(
        self,
        node: SyntaxNode,
        key: str | None,
        info: MatchContext,
        forward: bool,
        document_id: str,
    ) -> bool:
        if key != info.key or node.identity() == info.node.identity():
            return False
        start = node.start()
        if not _beyond(start, info.position, forward):
            return False
        first_row, last_row = info.scope_rows
        if not first_row <= start.row <= last_row:
            return False
        target = self._scopes.containing_scope(node, document_id, info.key)
        return target is not None and target.identity() == info.scope.identity()
