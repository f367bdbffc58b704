"""SyntaxNode adapters over py-tree-sitter nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tsmatchup.engine.models import NodeId, Position, RealId, SyntheticRange

if TYPE_CHECKING:
    import tree_sitter


def _first_line(source: bytes, start_byte: int, end_byte: int) -> str:
    return source[start_byte:end_byte].decode("utf-8", errors="replace").split("\n", 1)[0]


class TSNode:
    """A real tree node. Columns are byte offsets, as tree-sitter reports them."""

    __slots__ = ("_node", "_source")

    def __init__(self, node: tree_sitter.Node, source: bytes):
        self._node = node
        self._source = source

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def raw(self) -> tree_sitter.Node:
        return self._node

    @property
    def source(self) -> bytes:
        return self._source

    def start(self) -> Position:
        row, column = self._node.start_point
        return Position(row, column)

    def end(self) -> Position:
        row, column = self._node.end_point
        return Position(row, column)

    def span(self) -> int:
        return self._node.end_byte - self._node.start_byte

    def parent(self) -> TSNode | None:
        parent = self._node.parent
        return TSNode(parent, self._source) if parent is not None else None

    def identity(self) -> NodeId:
        return RealId(self._node.id)

    def text(self) -> str:
        return _first_line(self._source, self._node.start_byte, self._node.end_byte)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TSNode) and self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __repr__(self) -> str:
        return f"TSNode({self.type!r}, {tuple(self.start())}-{tuple(self.end())})"


class RangeNode:
    """A pseudo-node spanning several captured nodes.

    Its parent is the parent of the first node, so scope lookup walks up
    from the construct the range was captured in.
    """

    __slots__ = ("_first", "_last")

    def __init__(self, first: TSNode, last: TSNode):
        self._first = first
        self._last = last

    @property
    def type(self) -> str:
        return "range"

    def start(self) -> Position:
        return self._first.start()

    def end(self) -> Position:
        return self._last.end()

    def span(self) -> int:
        return self._last.raw.end_byte - self._first.raw.start_byte

    def parent(self) -> TSNode | None:
        return self._first.parent()

    def identity(self) -> NodeId:
        start, end = self.start(), self.end()
        return SyntheticRange(start.row, start.column, end.row, end.column)

    def text(self) -> str:
        return _first_line(self._first.source, self._first.raw.start_byte, self._last.raw.end_byte)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RangeNode) and self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __repr__(self) -> str:
        return f"RangeNode({tuple(self.start())}-{tuple(self.end())})"
