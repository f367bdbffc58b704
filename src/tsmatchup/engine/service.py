"""Public matching surface used by the navigation feature."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tsmatchup.config.models import MatchupConfig
from tsmatchup.core.errors import DocumentError
from tsmatchup.core.logging import get_logger
from tsmatchup.engine.active_nodes import ActiveNodeIndex
from tsmatchup.engine.cache import MatchResultCache
from tsmatchup.engine.locator import DelimiterLocator
from tsmatchup.engine.models import DelimOptions
from tsmatchup.engine.scopes import ScopeResolver
from tsmatchup.engine.search import MatchingSearch

if TYPE_CHECKING:
    from tsmatchup.engine.models import DelimiterDescriptor, MatchEntry, SyntaxNode
    from tsmatchup.engine.protocols import QueryEngine, TreeProvider
    from tsmatchup.treesitter.documents import DocumentStore

log = get_logger("engine.service")


class MatchupEngine:
    """Wires the index, resolver, locator, cache and search together.

    With no tree provider or query engine the feature is disabled: every
    operation returns its empty result.

    Usage::

        store = DocumentStore()
        engine = MatchupEngine(store, TreeSitterQueryEngine(store))
        store.open("buf1", source, "lua")
        engine.attach("buf1", "lua")

        delim = engine.get_delimiter("buf1", {"cursor": (0, 0), "side": "open"})
        if delim:
            engine.get_matching(delim.id, True, "buf1")
    """

    def __init__(
        self,
        trees: TreeProvider | None,
        queries: QueryEngine | None,
        config: MatchupConfig | None = None,
    ):
        self.config = config or MatchupConfig()
        matching = self.config.matching
        self._trees = trees
        self._queries = queries
        self.cache = MatchResultCache(matching.cache_capacity)
        self._index: ActiveNodeIndex | None = None
        self._scopes: ScopeResolver | None = None
        self._locator: DelimiterLocator | None = None
        self._search: MatchingSearch | None = None
        if trees is not None and queries is not None:
            self._index = ActiveNodeIndex(trees, queries, matching.ruleset)
            self._scopes = ScopeResolver(queries, matching.ruleset)
            self._locator = DelimiterLocator(
                self._index, self._scopes, self.cache, matching.max_line_length
            )
            self._search = MatchingSearch(self._index, self._scopes, self.cache)

    @classmethod
    def create(
        cls, config: MatchupConfig | None = None
    ) -> tuple[MatchupEngine, DocumentStore | None]:
        """Build an engine backed by tree-sitter, or a disabled one if unavailable."""
        try:
            from tsmatchup.treesitter.documents import DocumentStore
            from tsmatchup.treesitter.query import TreeSitterQueryEngine
        except ImportError as e:
            log.warning("tree_sitter_unavailable", error=str(e))
            return cls(None, None, config), None
        store = DocumentStore()
        return cls(store, TreeSitterQueryEngine(store), config), store

    # -------------------------------------------------------------------------
    # Host lifecycle
    # -------------------------------------------------------------------------

    def attach(self, document_id: str, language: str) -> None:
        """Start tracking a document; any stale state for the id is dropped."""
        self.invalidate(document_id)
        log.debug("document_attached", document_id=document_id, language=language)

    def detach(self, document_id: str) -> None:
        self.invalidate(document_id)
        self.cache.discard_document(document_id)
        log.debug("document_detached", document_id=document_id)

    def invalidate(self, document_id: str | None = None) -> None:
        """Drop memoized active nodes for one document (or all)."""
        if self._index is not None:
            self._index.invalidate(document_id)

    def clear_cache(self) -> None:
        self.cache.clear()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_enabled(self, document_id: str) -> bool:
        if self._trees is None or self._queries is None:
            return False
        if not self._trees.has_document(document_id):
            return False
        language = self._trees.language(document_id)
        if language is None or not self.config.languages.is_enabled(language):
            return False
        return self._queries.has_ruleset(language, self.config.matching.ruleset)

    def options(self, **values: Any) -> DelimOptions:
        """Build locate options, defaulting mid suppression from config."""
        values.setdefault("suppress_mids", self.config.matching.suppress_mid_markers)
        return DelimOptions.from_mapping(values)

    def get_delimiter(
        self, document_id: str, options: DelimOptions | Mapping[str, Any]
    ) -> DelimiterDescriptor | None:
        """Locate a delimiter near the cursor.

        Raises:
            InvalidOptionError: If ``options`` is a mapping with unknown
                keys, no cursor, or a bad cursor, direction or side.
        """
        if not isinstance(options, DelimOptions):
            options = self.options(**options)
        if self._locator is None or not self.is_enabled(document_id):
            log.debug("matchup_disabled", document_id=document_id)
            return None
        try:
            return self._locator.get_delimiter(document_id, options)
        except DocumentError as e:
            log.debug("document_unavailable", document_id=document_id, error=str(e))
            return None

    def get_matching(
        self,
        descriptor_id: str,
        forward: bool,
        document_id: str,
        *,
        suppress_mids: bool | None = None,
    ) -> list[MatchEntry]:
        if self._search is None or not self.is_enabled(document_id):
            return []
        if suppress_mids is None:
            suppress_mids = self.config.matching.suppress_mid_markers
        try:
            return self._search.get_matching(descriptor_id, forward, document_id, suppress_mids)
        except DocumentError as e:
            log.debug("document_unavailable", document_id=document_id, error=str(e))
            return []

    def get_scopes(self, document_id: str) -> dict[str, list[SyntaxNode]]:
        if self._scopes is None or not self.is_enabled(document_id):
            return {}
        return self._scopes.scopes(document_id)
