"""Tree-sitter backed collaborators: documents, nodes and the query engine."""

from tsmatchup.treesitter.documents import DocumentStore
from tsmatchup.treesitter.grammars import detect_language, is_available, load_language
from tsmatchup.treesitter.nodes import RangeNode, TSNode
from tsmatchup.treesitter.query import TreeSitterQueryEngine

__all__ = [
    "DocumentStore",
    "RangeNode",
    "TreeSitterQueryEngine",
    "TSNode",
    "detect_language",
    "is_available",
    "load_language",
]
