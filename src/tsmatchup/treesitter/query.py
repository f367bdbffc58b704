"""Query engine: runs a bundled ruleset and groups captures into MatchRecords."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Query, QueryCursor

from tsmatchup.core.errors import DocumentError
from tsmatchup.core.logging import get_logger
from tsmatchup.engine.models import MatchRecord, Side, SyntaxNode
from tsmatchup.treesitter._rulesets import RULESETS
from tsmatchup.treesitter.grammars import load_language
from tsmatchup.treesitter.nodes import RangeNode, TSNode

if TYPE_CHECKING:
    import tree_sitter

    from tsmatchup.treesitter.documents import DocumentStore

log = get_logger("treesitter.query")

_SIDES = {side.value for side in Side} | {"scope"}


def parse_capture_name(name: str) -> tuple[str, str] | None:
    """Split ``open.if`` / ``mid.if.1`` into (side, key); None for other captures."""
    parts = name.split(".")
    if len(parts) < 2 or parts[0] not in _SIDES or not parts[1]:
        return None
    return parts[0], parts[1]


def to_record(captures: dict[str, list[tree_sitter.Node]], source: bytes) -> MatchRecord:
    """Group one match's captures by side and key.

    A capture holding several nodes becomes one RangeNode over all of them.
    """
    record = MatchRecord()
    for name, nodes in captures.items():
        parsed = parse_capture_name(name)
        if parsed is None or not nodes:
            continue
        side, key = parsed
        node: SyntaxNode
        if len(nodes) == 1:
            node = TSNode(nodes[0], source)
        else:
            ordered = sorted(nodes, key=lambda n: n.start_byte)
            node = RangeNode(TSNode(ordered[0], source), TSNode(ordered[-1], source))
        if side == "mid":
            record.mid.setdefault(key, []).append(node)
        else:
            getattr(record, side)[key] = node
    return record


class TreeSitterQueryEngine:
    """QueryEngine over a DocumentStore.

    Compiled queries are cached per (language, ruleset); match results are
    memoized per document revision.
    """

    def __init__(
        self,
        documents: DocumentStore,
        rulesets: dict[str, dict[str, list[str]]] | None = None,
    ):
        self._documents = documents
        self._rulesets = rulesets if rulesets is not None else RULESETS
        self._queries: dict[tuple[str, str], Query | None] = {}
        self._matches: dict[tuple[str, str], tuple[int, list[MatchRecord]]] = {}

    def has_ruleset(self, language: str, ruleset: str) -> bool:
        try:
            return self._get_query(language, ruleset) is not None
        except DocumentError:
            return False

    def _get_query(self, language: str, ruleset: str) -> Query | None:
        """Compile and cache the ruleset for a language."""
        cache_key = (language, ruleset)
        if cache_key in self._queries:
            return self._queries[cache_key]

        patterns = self._rulesets.get(ruleset, {}).get(language)
        if not patterns:
            self._queries[cache_key] = None
            return None

        lang = load_language(language)
        valid: list[str] = []
        for pattern in patterns:
            try:
                Query(lang, pattern)
            except Exception as e:  # noqa: BLE001 - grammar mismatch
                log.warning(
                    "query_pattern_skipped", language=language, pattern=pattern, error=str(e)
                )
                continue
            valid.append(pattern)

        query = Query(lang, "\n".join(valid)) if valid else None
        self._queries[cache_key] = query
        return query

    def get_matches(self, document_id: str, ruleset: str) -> list[MatchRecord]:
        language = self._documents.language(document_id)
        if language is None:
            return []
        revision = self._documents.revision(document_id)
        memo_key = (document_id, ruleset)
        cached = self._matches.get(memo_key)
        if cached is not None and cached[0] == revision:
            return cached[1]

        query = self._get_query(language, ruleset)
        if query is None:
            return []

        tree = self._documents.tree(document_id)
        source = self._documents.source(document_id)
        records: list[MatchRecord] = []
        for _pattern_idx, captures in QueryCursor(query).matches(tree.root_node):
            record = to_record(captures, source)
            if record.open or record.mid or record.close or record.scope:
                records.append(record)

        self._matches[memo_key] = (revision, records)
        return records
