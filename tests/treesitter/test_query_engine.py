"""Tests for TreeSitterQueryEngine and the node adapters."""

from __future__ import annotations

import pytest

from tsmatchup.engine.models import RealId, SyntheticRange
from tsmatchup.treesitter.documents import DocumentStore
from tsmatchup.treesitter.nodes import RangeNode, TSNode
from tsmatchup.treesitter.query import TreeSitterQueryEngine, parse_capture_name


class TestParseCaptureName:
    """Capture naming convention."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("open.if", ("open", "if")),
            ("mid.if.1", ("mid", "if")),
            ("close.loop", ("close", "loop")),
            ("scope.function", ("scope", "function")),
            ("_helper", None),
            ("name", None),
            ("open.", None),
            ("keyword.if", None),
        ],
    )
    def test_parse(self, name: str, expected: tuple[str, str] | None) -> None:
        assert parse_capture_name(name) == expected


class TestTSNode:
    """Adapter over tree-sitter nodes."""

    def test_positions_text_and_identity(self, store: DocumentStore, python_doc: str) -> None:
        # Given
        root = store.tree(python_doc).root_node
        if_stmt = root.children[0]
        keyword = if_stmt.children[0]
        node = TSNode(keyword, store.source(python_doc))

        # Then
        assert node.type == "if"
        assert tuple(node.start()) == (0, 0)
        assert tuple(node.end()) == (0, 2)
        assert node.span() == 2
        assert node.text() == "if"
        assert node.identity() == RealId(keyword.id)

    def test_parent_identity_matches_direct_node(
        self, store: DocumentStore, python_doc: str
    ) -> None:
        """The same tree node reached two ways has one identity."""
        source = store.source(python_doc)
        if_stmt = store.tree(python_doc).root_node.children[0]
        keyword = TSNode(if_stmt.children[0], source)

        parent = keyword.parent()

        assert parent is not None
        assert parent.identity() == TSNode(if_stmt, source).identity()
        assert parent == TSNode(if_stmt, source)

    def test_text_is_first_line(self, store: DocumentStore, python_doc: str) -> None:
        source = store.source(python_doc)
        if_stmt = TSNode(store.tree(python_doc).root_node.children[0], source)
        assert if_stmt.text() == "if a:"


class TestGetMatches:
    """Running the bundled ruleset."""

    def test_python_ruleset_groups_captures(
        self, query_engine: TreeSitterQueryEngine, python_doc: str
    ) -> None:
        # When
        records = query_engine.get_matches(python_doc, "matchup")

        # Then
        opens = [r.open["if"].text() for r in records if "if" in r.open]
        mids = [n.text() for r in records for n in r.mid.get("if", [])]
        scopes = [r.scope["if"] for r in records if "if" in r.scope]
        assert opens == ["if"]
        assert mids == ["elif", "else"]
        assert len(scopes) == 1
        assert scopes[0].type == "if_statement"

    def test_has_ruleset(self, query_engine: TreeSitterQueryEngine) -> None:
        assert query_engine.has_ruleset("python", "matchup") is True
        assert query_engine.has_ruleset("python", "textobjects") is False
        assert query_engine.has_ruleset("cobol", "matchup") is False

    def test_missing_grammar_disables_ruleset(self, store: DocumentStore) -> None:
        engine = TreeSitterQueryEngine(store, {"matchup": {"cobol": ["(x) @open.x"]}})
        assert engine.has_ruleset("cobol", "matchup") is False

    def test_matches_memoized_per_revision(
        self, store: DocumentStore, query_engine: TreeSitterQueryEngine, python_doc: str
    ) -> None:
        first = query_engine.get_matches(python_doc, "matchup")
        assert query_engine.get_matches(python_doc, "matchup") is first

        store.update(python_doc, "x = 1\n")

        assert query_engine.get_matches(python_doc, "matchup") == []

    def test_invalid_pattern_skipped(self, store: DocumentStore, python_doc: str) -> None:
        """A pattern the grammar rejects does not take the others down."""
        engine = TreeSitterQueryEngine(
            store,
            {
                "matchup": {
                    "python": [
                        "(no_such_node) @open.bogus",
                        '(if_statement "if" @open.if) @scope.if',
                    ]
                }
            },
        )

        records = engine.get_matches(python_doc, "matchup")

        assert engine.has_ruleset("python", "matchup") is True
        assert [r.open["if"].text() for r in records if "if" in r.open] == ["if"]

    def test_all_patterns_invalid(self, store: DocumentStore, python_doc: str) -> None:
        engine = TreeSitterQueryEngine(store, {"matchup": {"python": ["(no_such_node) @open.x"]}})
        assert engine.has_ruleset("python", "matchup") is False
        assert engine.get_matches(python_doc, "matchup") == []

    def test_multi_node_capture_becomes_range(self, store: DocumentStore, python_doc: str) -> None:
        """Two nodes under one capture name are merged into a synthetic range."""
        engine = TreeSitterQueryEngine(
            store,
            {"matchup": {"python": ['(if_statement "if" @open.if ":" @open.if) @scope.if']}},
        )

        records = engine.get_matches(python_doc, "matchup")

        node = records[0].open["if"]
        assert isinstance(node, RangeNode)
        assert node.identity() == SyntheticRange(0, 0, 0, 5)
        assert node.text() == "if a:"
        assert node.span() == 5
        parent = node.parent()
        assert parent is not None
        assert parent.type == "if_statement"

    def test_unknown_document_has_no_matches(self, query_engine: TreeSitterQueryEngine) -> None:
        assert query_engine.get_matches("missing", "matchup") == []
