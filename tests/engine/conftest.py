"""Shared fixtures for engine tests.

The engine only sees SyntaxNode / TreeProvider / QueryEngine protocols, so
these tests drive it with small hand-built trees instead of a real parser.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from tsmatchup.config.models import MatchupConfig
from tsmatchup.engine.active_nodes import ActiveNodeIndex
from tsmatchup.engine.cache import MatchResultCache
from tsmatchup.engine.locator import DelimiterLocator
from tsmatchup.engine.models import MatchRecord, NodeId, Position, RealId
from tsmatchup.engine.scopes import ScopeResolver
from tsmatchup.engine.search import MatchingSearch
from tsmatchup.engine.service import MatchupEngine

_handles = itertools.count(1)


class FakeNode:
    """SyntaxNode over a slice of a FakeDocument's source."""

    def __init__(
        self,
        doc: FakeDocument,
        type: str,
        start: tuple[int, int],
        end: tuple[int, int],
        parent: FakeNode | None,
    ):
        self.type = type
        self._doc = doc
        self._start = Position(*start)
        self._end = Position(*end)
        self._parent = parent
        self._id = RealId(next(_handles))

    def start(self) -> Position:
        return self._start

    def end(self) -> Position:
        return self._end

    def span(self) -> int:
        return self._doc.offset(self._end) - self._doc.offset(self._start)

    def parent(self) -> FakeNode | None:
        return self._parent

    def identity(self) -> NodeId:
        return self._id

    def text(self) -> str:
        raw = self._doc.source[self._doc.offset(self._start) : self._doc.offset(self._end)]
        return raw.split("\n", 1)[0]

    def __repr__(self) -> str:
        return f"FakeNode({self.type!r}, {tuple(self._start)}-{tuple(self._end)})"


class FakeDocument:
    """Source text plus a hand-built node tree and query matches."""

    def __init__(self, source: str, language: str = "lua"):
        self.source = source
        self.language = language
        self.lines = source.split("\n")
        self.root = FakeNode(self, "chunk", (0, 0), (len(self.lines) - 1, len(self.lines[-1])), None)
        self.records: list[MatchRecord] = []

    def offset(self, pos: Position) -> int:
        return sum(len(line) + 1 for line in self.lines[: pos.row]) + pos.column

    def node(
        self,
        type: str,
        start: tuple[int, int],
        end: tuple[int, int],
        parent: FakeNode | None = None,
    ) -> FakeNode:
        return FakeNode(self, type, start, end, parent or self.root)

    def keyword(self, word: str, row: int, parent: FakeNode, column: int | None = None) -> FakeNode:
        """Node for the first occurrence of ``word`` on ``row``."""
        col = self.lines[row].index(word) if column is None else column
        return self.node(word, (row, col), (row, col + len(word)), parent)

    def match(self, **groups: dict[str, Any]) -> MatchRecord:
        record = MatchRecord(
            open=groups.get("open", {}),
            mid=groups.get("mid", {}),
            close=groups.get("close", {}),
            scope=groups.get("scope", {}),
        )
        self.records.append(record)
        return record


@dataclass
class FakeTrees:
    """TreeProvider over FakeDocuments."""

    documents: dict[str, FakeDocument] = field(default_factory=dict)
    revisions: dict[str, int] = field(default_factory=dict)
    parse_calls: list[str] = field(default_factory=list)

    def add(self, document_id: str, doc: FakeDocument) -> None:
        self.documents[document_id] = doc
        self.revisions[document_id] = self.revisions.get(document_id, -1) + 1

    def bump(self, document_id: str) -> None:
        self.revisions[document_id] += 1

    def has_document(self, document_id: str) -> bool:
        return document_id in self.documents

    def language(self, document_id: str) -> str | None:
        doc = self.documents.get(document_id)
        return doc.language if doc else None

    def revision(self, document_id: str) -> int:
        return self.revisions[document_id]

    def parse(self, document_id: str) -> None:
        self.parse_calls.append(document_id)


@dataclass
class FakeQueries:
    """QueryEngine returning each FakeDocument's recorded matches."""

    trees: FakeTrees
    languages: set[str] = field(default_factory=lambda: {"lua"})
    calls: int = 0

    def has_ruleset(self, language: str, ruleset: str) -> bool:
        return ruleset == "matchup" and language in self.languages

    def get_matches(self, document_id: str, ruleset: str) -> list[MatchRecord]:  # noqa: ARG002
        self.calls += 1
        doc = self.trees.documents.get(document_id)
        return list(doc.records) if doc else []


@dataclass
class Engine:
    """Engine components wired over the fakes."""

    trees: FakeTrees
    queries: FakeQueries
    index: ActiveNodeIndex
    scopes: ScopeResolver
    cache: MatchResultCache
    locator: DelimiterLocator
    search: MatchingSearch


@pytest.fixture
def trees() -> FakeTrees:
    return FakeTrees()


@pytest.fixture
def queries(trees: FakeTrees) -> FakeQueries:
    return FakeQueries(trees)


@pytest.fixture
def engine(trees: FakeTrees, queries: FakeQueries) -> Engine:
    index = ActiveNodeIndex(trees, queries)
    scopes = ScopeResolver(queries)
    cache = MatchResultCache()
    return Engine(
        trees=trees,
        queries=queries,
        index=index,
        scopes=scopes,
        cache=cache,
        locator=DelimiterLocator(index, scopes, cache),
        search=MatchingSearch(index, scopes, cache),
    )


@pytest.fixture
def make_service(trees: FakeTrees, queries: FakeQueries) -> Callable[..., MatchupEngine]:
    def _make(**matching: Any) -> MatchupEngine:
        config = MatchupConfig.model_validate({"matching": matching})
        return MatchupEngine(trees, queries, config)

    return _make


# =============================================================================
# Documents
# =============================================================================


@dataclass
class IfEnd:
    doc: FakeDocument
    scope: FakeNode
    if_kw: FakeNode
    end_kw: FakeNode


@pytest.fixture
def if_end(trees: FakeTrees) -> IfEnd:
    """``if x then / y / end`` with if=open and end=close, no mids."""
    doc = FakeDocument("if x then\n  y\nend")
    scope = doc.node("if_statement", (0, 0), (2, 3))
    if_kw = doc.keyword("if", 0, scope)
    end_kw = doc.keyword("end", 2, scope)
    doc.match(open={"if": if_kw}, close={"if": end_kw}, scope={"if": scope})
    trees.add("buf1", doc)
    return IfEnd(doc, scope, if_kw, end_kw)


@dataclass
class IfChain:
    doc: FakeDocument
    scope: FakeNode
    if_kw: FakeNode
    elseif_kw: FakeNode
    else_kw: FakeNode
    end_kw: FakeNode


@pytest.fixture
def if_chain(trees: FakeTrees) -> IfChain:
    """if / elseif / else / end, mids under key ``if``."""
    doc = FakeDocument("if a then\n  x\nelseif b then\n  y\nelse\n  z\nend")
    scope = doc.node("if_statement", (0, 0), (6, 3))
    elseif_stmt = doc.node("elseif_statement", (2, 0), (3, 3), scope)
    else_stmt = doc.node("else_statement", (4, 0), (5, 3), scope)
    chain = IfChain(
        doc=doc,
        scope=scope,
        if_kw=doc.keyword("if", 0, scope),
        elseif_kw=doc.keyword("elseif", 2, elseif_stmt),
        else_kw=doc.keyword("else", 4, else_stmt),
        end_kw=doc.keyword("end", 6, scope),
    )
    doc.match(open={"if": chain.if_kw}, close={"if": chain.end_kw}, scope={"if": scope})
    doc.match(mid={"if": [chain.elseif_kw]})
    doc.match(mid={"if": [chain.else_kw]})
    trees.add("buf1", doc)
    return chain


@dataclass
class Nested:
    doc: FakeDocument
    outer: FakeNode
    inner: FakeNode
    outer_if: FakeNode
    inner_if: FakeNode
    inner_end: FakeNode
    outer_end: FakeNode


@pytest.fixture
def nested(trees: FakeTrees) -> Nested:
    """Two nested if/end constructs sharing the key ``if``."""
    doc = FakeDocument("if a then\n  if b then\n    x\n  end\nend")
    outer = doc.node("if_statement", (0, 0), (4, 3))
    inner = doc.node("if_statement", (1, 2), (3, 5), outer)
    n = Nested(
        doc=doc,
        outer=outer,
        inner=inner,
        outer_if=doc.keyword("if", 0, outer),
        inner_if=doc.keyword("if", 1, inner),
        inner_end=doc.keyword("end", 3, inner),
        outer_end=doc.keyword("end", 4, outer),
    )
    doc.match(open={"if": n.outer_if}, close={"if": n.outer_end}, scope={"if": outer})
    doc.match(open={"if": n.inner_if}, close={"if": n.inner_end}, scope={"if": inner})
    trees.add("buf1", doc)
    return n


@pytest.fixture
def if_else(trees: FakeTrees) -> FakeDocument:
    """if / else without a close delimiter; the scope ends at 3:3 (0-based)."""
    doc = FakeDocument("if a:\n  x\nelse:\n  y")
    scope = doc.node("if_statement", (0, 0), (3, 3))
    else_clause = doc.node("else_clause", (2, 0), (3, 3), scope)
    doc.match(open={"if": doc.keyword("if", 0, scope)}, scope={"if": scope})
    doc.match(mid={"if": [doc.keyword("else", 2, else_clause)]})
    trees.add("buf1", doc)
    return doc
