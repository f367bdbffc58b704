"""Locate the delimiter at, after or before the cursor."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from tsmatchup.core.logging import get_logger
from tsmatchup.engine.models import (
    DelimiterDescriptor,
    Direction,
    MatchContext,
    Position,
    Side,
    contains,
)

if TYPE_CHECKING:
    from tsmatchup.engine.active_nodes import ActiveNodeIndex
    from tsmatchup.engine.cache import MatchResultCache
    from tsmatchup.engine.models import ActiveNodeSet, DelimOptions, SyntaxNode
    from tsmatchup.engine.scopes import ScopeResolver

log = get_logger("engine.locator")

DEFAULT_MAX_LINE_LENGTH = 100_000


class DelimiterLocator:
    """Picks one delimiter node for a locate request and records its context.

    ``max_line_length`` linearizes positions as ``row * max_line_length + column``
    for next/prev ordering; columns at or beyond it collide with the next row.
    """

    def __init__(
        self,
        index: ActiveNodeIndex,
        scopes: ScopeResolver,
        cache: MatchResultCache,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ):
        self._index = index
        self._scopes = scopes
        self._cache = cache
        self._max_col = max_line_length

    def get_delimiter(
        self, document_id: str, options: DelimOptions
    ) -> DelimiterDescriptor | None:
        active = self._index.compute(document_id)
        sides = options.side.expand(options.suppress_mids)

        if options.direction is Direction.CURRENT:
            found = self._innermost(active, sides, options.cursor)
        else:
            found = self._closest(active, sides, options.cursor, options.direction)

        if found is None:
            log.debug(
                "delimiter_not_found",
                document_id=document_id,
                direction=options.direction.value,
                side=options.side.value,
                cursor=tuple(options.cursor),
            )
            return None

        node, side = found
        key = active.key_of(node)
        if key is None:
            return None
        return self._materialize(document_id, node, side, key, options)

    @staticmethod
    def _innermost(
        active: ActiveNodeSet, sides: list[Side], cursor: Position
    ) -> tuple[SyntaxNode, Side] | None:
        best: tuple[SyntaxNode, Side] | None = None
        best_span: int | None = None
        for side in sides:
            for node in active.nodes(side):
                if not contains(node, cursor):
                    continue
                span = node.span()
                if best_span is None or span < best_span:
                    best, best_span = (node, side), span
        return best

    def _closest(
        self,
        active: ActiveNodeSet,
        sides: list[Side],
        cursor: Position,
        direction: Direction,
    ) -> tuple[SyntaxNode, Side] | None:
        cur_pos = self._linear(cursor)
        best: tuple[SyntaxNode, Side] | None = None
        best_dist: int | None = None
        for side in sides:
            for node in active.nodes(side):
                pos = self._linear(node.start())
                if direction is Direction.NEXT and pos < cur_pos:
                    continue
                if direction is Direction.PREV and pos > cur_pos:
                    continue
                dist = abs(pos - cur_pos)
                if best_dist is None or dist < best_dist:
                    best, best_dist = (node, side), dist
        return best

    def _linear(self, pos: Position) -> int:
        return pos.row * self._max_col + pos.column

    def _materialize(
        self,
        document_id: str,
        node: SyntaxNode,
        side: Side,
        key: str,
        options: DelimOptions,
    ) -> DelimiterDescriptor | None:
        scope = self._scopes.containing_scope(node, document_id, key)
        if scope is None:
            log.debug("delimiter_without_scope", document_id=document_id, key=key)
            return None

        start = node.start()
        descriptor = DelimiterDescriptor(
            id=str(uuid.uuid4()),
            side=side,
            key=key,
            text=node.text(),
            line=start.row + 1,
            column=start.column + 1,
            highlighting=options.highlighting,
            match_class=(key, 0),
        )
        self._cache.set(
            descriptor.id,
            MatchContext(
                document_id=document_id,
                node=node,
                position=start,
                key=key,
                scope=scope,
                scope_rows=(scope.start().row, scope.end().row),
            ),
        )
        return descriptor
