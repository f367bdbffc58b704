"""Tree-sitter grammar lookup for the bundled rulesets.

Grammars ship as separate ``tree-sitter-<lang>`` distributions; a grammar that
is not installed makes its language unavailable instead of failing import.
"""

from __future__ import annotations

import importlib
from importlib.util import find_spec
from pathlib import Path

import tree_sitter

from tsmatchup.core.errors import DocumentError

# language -> (import name, language function)
GRAMMARS: dict[str, tuple[str, str]] = {
    "python": ("tree_sitter_python", "language"),
    "lua": ("tree_sitter_lua", "language"),
    "bash": ("tree_sitter_bash", "language"),
}

EXTENSIONS: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".lua": "lua",
    ".sh": "bash",
    ".bash": "bash",
}

_languages: dict[str, tree_sitter.Language] = {}


def detect_language(path: Path) -> str | None:
    return EXTENSIONS.get(path.suffix.lower())


def is_available(language: str) -> bool:
    """Whether the grammar for ``language`` is importable."""
    entry = GRAMMARS.get(language)
    return entry is not None and find_spec(entry[0]) is not None


def load_language(language: str) -> tree_sitter.Language:
    """Get or load the tree-sitter Language for ``language``.

    Raises:
        DocumentError: If the language is unknown or its grammar is missing.
    """
    if language in _languages:
        return _languages[language]

    entry = GRAMMARS.get(language)
    if entry is None:
        raise DocumentError.language_unavailable(language, "no grammar registered")
    module_name, func_name = entry
    try:
        module = importlib.import_module(module_name)
        lang = tree_sitter.Language(getattr(module, func_name)())
    except (ImportError, AttributeError) as err:
        raise DocumentError.language_unavailable(language, f"{module_name} not installed") from err

    _languages[language] = lang
    return lang
