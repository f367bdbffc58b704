"""Value types shared by the matching engine.

Positions are 0-based (row, column) internally; descriptors and match entries
handed to the host are 1-based.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, Protocol, Union, runtime_checkable

from tsmatchup.core.errors import InvalidOptionError


class Side(str, Enum):
    """Role of a delimiter within its construct."""

    OPEN = "open"
    MID = "mid"
    CLOSE = "close"


class Direction(str, Enum):
    """Where to look for a delimiter relative to the cursor."""

    CURRENT = "current"
    NEXT = "next"
    PREV = "prev"


class SideGroup(str, Enum):
    """Side selection accepted by a locate request."""

    OPEN = "open"
    MID = "mid"
    CLOSE = "close"
    BOTH = "both"
    BOTH_ALL = "both_all"
    OPEN_MID = "open_mid"

    def expand(self, suppress_mids: bool = False) -> list[Side]:
        """Sides scanned for this group, in scan order."""
        sides = SIDE_TABLE[self]
        if suppress_mids:
            return [side for side in sides if side is not Side.MID]
        return list(sides)


SIDE_TABLE: dict[SideGroup, tuple[Side, ...]] = {
    SideGroup.OPEN: (Side.OPEN,),
    SideGroup.MID: (Side.MID,),
    SideGroup.CLOSE: (Side.CLOSE,),
    SideGroup.BOTH: (Side.CLOSE, Side.OPEN),
    SideGroup.BOTH_ALL: (Side.CLOSE, Side.MID, Side.OPEN),
    SideGroup.OPEN_MID: (Side.MID, Side.OPEN),
}


class Position(NamedTuple):
    """0-based (row, column) point in a document."""

    row: int
    column: int


# =============================================================================
# Node identity
# =============================================================================


@dataclass(frozen=True, slots=True)
class RealId:
    """Identity of a node backed by the syntax tree."""

    handle: int


@dataclass(frozen=True, slots=True)
class SyntheticRange:
    """Identity of a range pseudo-node, derived from its coordinates."""

    start_row: int
    start_column: int
    end_row: int
    end_column: int


NodeId = Union[RealId, SyntheticRange]


@runtime_checkable
class SyntaxNode(Protocol):
    """Handle into a parsed tree, as consumed by the engine."""

    @property
    def type(self) -> str: ...

    def start(self) -> Position: ...

    def end(self) -> Position: ...

    def span(self) -> int: ...

    def parent(self) -> SyntaxNode | None: ...

    def identity(self) -> NodeId: ...

    def text(self) -> str: ...


def contains(node: SyntaxNode, pos: Position) -> bool:
    """Whether ``pos`` falls inside ``node`` (end exclusive)."""
    start, end = node.start(), node.end()
    if not start.row <= pos.row <= end.row:
        return False
    if start.row == pos.row == end.row:
        return start.column <= pos.column < end.column
    if pos.row == start.row:
        return pos.column >= start.column
    if pos.row == end.row:
        return pos.column < end.column
    return True


# =============================================================================
# Query results
# =============================================================================


@dataclass(frozen=True, slots=True)
class TaggedNode:
    """One node classified by the query engine."""

    side: Side
    key: str
    node: SyntaxNode


@dataclass
class MatchRecord:
    """Captures of a single query match, grouped by side then symbol key."""

    open: dict[str, SyntaxNode] = field(default_factory=dict)
    mid: dict[str, list[SyntaxNode]] = field(default_factory=dict)
    close: dict[str, SyntaxNode] = field(default_factory=dict)
    scope: dict[str, SyntaxNode] = field(default_factory=dict)

    def tagged(self) -> Iterator[TaggedNode]:
        """Yield delimiter tags in open, close, mid order."""
        for key, node in self.open.items():
            yield TaggedNode(Side.OPEN, key, node)
        for key, node in self.close.items():
            yield TaggedNode(Side.CLOSE, key, node)
        for key, group in self.mid.items():
            for node in group:
                yield TaggedNode(Side.MID, key, node)


@dataclass
class ActiveNodeSet:
    """Delimiter candidates of one document revision."""

    open: list[SyntaxNode] = field(default_factory=list)
    mid: list[SyntaxNode] = field(default_factory=list)
    close: list[SyntaxNode] = field(default_factory=list)
    symbols: dict[NodeId, str] = field(default_factory=dict)
    sides: dict[NodeId, Side] = field(default_factory=dict)

    def nodes(self, side: Side) -> list[SyntaxNode]:
        return getattr(self, side.value)

    def key_of(self, node: SyntaxNode) -> str | None:
        return self.symbols.get(node.identity())

    def add(self, tag: TaggedNode) -> bool:
        """Register a tag unless its node is already known. Returns True if added."""
        node_id = tag.node.identity()
        if node_id in self.symbols:
            return False
        self.nodes(tag.side).append(tag.node)
        self.symbols[node_id] = tag.key
        self.sides[node_id] = tag.side
        return True

    def __len__(self) -> int:
        return len(self.symbols)


# =============================================================================
# Requests and results
# =============================================================================


_OPTION_NAMES = ("cursor", "direction", "side", "highlighting", "suppress_mids")


@dataclass(frozen=True)
class DelimOptions:
    """A locate request."""

    cursor: Position
    direction: Direction = Direction.CURRENT
    side: SideGroup = SideGroup.BOTH_ALL
    highlighting: bool = False
    suppress_mids: bool = False

    @classmethod
    def build(
        cls,
        cursor: tuple[int, int],
        direction: str | Direction = Direction.CURRENT,
        side: str | SideGroup = SideGroup.BOTH_ALL,
        highlighting: bool = False,
        suppress_mids: bool = False,
    ) -> DelimOptions:
        """Validate raw option values coming from the host.

        Raises:
            InvalidOptionError: On an unknown direction or side selection,
                or a cursor that is not a (row, column) pair of ints.
        """
        try:
            row, column = cursor
        except (TypeError, ValueError):
            raise InvalidOptionError.malformed("cursor", cursor, "expected (row, column)") from None
        if not isinstance(row, int) or not isinstance(column, int):
            raise InvalidOptionError.malformed("cursor", cursor, "row and column must be ints")
        try:
            direction = Direction(direction)
        except ValueError:
            raise InvalidOptionError.unknown(
                "direction", direction, [d.value for d in Direction]
            ) from None
        try:
            side = SideGroup(side)
        except ValueError:
            raise InvalidOptionError.unknown("side", side, [s.value for s in SideGroup]) from None
        return cls(
            cursor=Position(row, column),
            direction=direction,
            side=side,
            highlighting=highlighting,
            suppress_mids=suppress_mids,
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> DelimOptions:
        """Like ``build``, for a mapping of option names supplied by the host.

        Raises:
            InvalidOptionError: Also on unknown keys or a missing ``cursor``.
        """
        unknown = sorted(set(values) - set(_OPTION_NAMES))
        if unknown:
            raise InvalidOptionError.unexpected_keys(unknown, list(_OPTION_NAMES))
        if "cursor" not in values:
            raise InvalidOptionError.missing("cursor")
        return cls.build(**values)


@dataclass(frozen=True)
class DelimiterDescriptor:
    """Located delimiter, 1-based, handed back to the host."""

    id: str
    side: Side
    key: str
    text: str
    line: int
    column: int
    highlighting: bool = False
    skip: int = 0
    match_class: tuple[str, int] = ("", 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "side": self.side.value,
            "key": self.key,
            "match": self.text,
            "lnum": self.line,
            "cnum": self.column,
            "highlighting": self.highlighting,
            "skip": self.skip,
            "class": list(self.match_class),
        }


@dataclass(frozen=True)
class MatchContext:
    """What a later matching search needs to know about a located delimiter."""

    document_id: str
    node: SyntaxNode
    position: Position
    key: str
    scope: SyntaxNode
    scope_rows: tuple[int, int]


class MatchEntry(NamedTuple):
    """One delimiter completing a construct, 1-based. Empty text marks the scope end."""

    text: str
    line: int
    column: int
