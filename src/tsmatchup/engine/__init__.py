"""Delimiter matching engine."""

from tsmatchup.engine.active_nodes import ActiveNodeIndex
from tsmatchup.engine.cache import MatchResultCache
from tsmatchup.engine.locator import DelimiterLocator
from tsmatchup.engine.models import (
    ActiveNodeSet,
    DelimiterDescriptor,
    DelimOptions,
    Direction,
    MatchContext,
    MatchEntry,
    MatchRecord,
    NodeId,
    Position,
    RealId,
    Side,
    SideGroup,
    SyntaxNode,
    SyntheticRange,
    TaggedNode,
)
from tsmatchup.engine.scopes import ScopeResolver
from tsmatchup.engine.search import MatchingSearch
from tsmatchup.engine.service import MatchupEngine

__all__ = [
    "ActiveNodeIndex",
    "ActiveNodeSet",
    "DelimiterDescriptor",
    "DelimiterLocator",
    "DelimOptions",
    "Direction",
    "MatchContext",
    "MatchEntry",
    "MatchingSearch",
    "MatchRecord",
    "MatchResultCache",
    "MatchupEngine",
    "NodeId",
    "Position",
    "RealId",
    "ScopeResolver",
    "Side",
    "SideGroup",
    "SyntaxNode",
    "SyntheticRange",
    "TaggedNode",
]
