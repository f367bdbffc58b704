"""tsmatchup - tree-sitter driven delimiter matching."""

__version__ = "0.1.0"
