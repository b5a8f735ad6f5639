from __future__ import annotations

"""
Syntax Tree Parser Adapter.

Turns script source text into a tree-sitter syntax tree that understands
JSX markup, modern script syntax and TypeScript annotations. Parse problems
are reported as a failed outcome with a diagnostic instead of an exception,
so a malformed file can be skipped without aborting the scan.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Dict, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GRAMMARS
# -----------------------------------------------------------------------------

TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())
TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

# Plain '.ts' allows '<T>expr' casts, which conflict with markup syntax
_LANGUAGE_BY_EXTENSION: Dict[str, Language] = {
    ".ts": TYPESCRIPT_LANGUAGE,
    ".mts": TYPESCRIPT_LANGUAGE,
    ".cts": TYPESCRIPT_LANGUAGE,
}

# Parser instances are not thread-safe
_thread_state = threading.local()


@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of parsing a single source text.

    Attributes:
        ok: True when a clean syntax tree was produced.
        tree: The tree-sitter tree (None on failure).
        error: Diagnostic message on failure.
    """
    ok: bool
    tree: Optional[Tree] = None
    error: str = ""

    @property
    def root(self) -> Optional[Node]:
        return self.tree.root_node if self.tree is not None else None


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_source(file_path: str) -> str:
    """
    Read a source file as UTF-8 text, dropping a byte order mark if present.

    Raises:
        OSError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with open(file_path, "r", encoding="utf-8-sig") as f:
        return f.read()


def parse_source(source: str, file_name: str = "module.tsx") -> ParseOutcome:
    """
    Parse script source into a syntax tree.

    tree-sitter always recovers from syntax errors; a tree that contains
    error or missing nodes is reported as a failed outcome.

    Args:
        source: File contents.
        file_name: Name used to select the grammar by extension.

    Returns:
        ParseOutcome: The tree, or a diagnostic with the first error location.
    """
    language = language_for(file_name)
    parser = _get_parser(language)
    tree = parser.parse(source.encode("utf-8"))

    if tree.root_node.has_error:
        return ParseOutcome(ok=False, error=_describe_first_error(tree.root_node))

    return ParseOutcome(ok=True, tree=tree)


def language_for(file_name: str) -> Language:
    """Select the grammar for a file name; TSX is the permissive default."""
    _, ext = os.path.splitext(file_name)
    return _LANGUAGE_BY_EXTENSION.get(ext.lower(), TSX_LANGUAGE)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get_parser(language: Language) -> Parser:
    """Return this thread's parser for the given grammar."""
    parsers = getattr(_thread_state, "parsers", None)
    if parsers is None:
        parsers = {}
        _thread_state.parsers = parsers

    key = id(language)
    parser = parsers.get(key)
    if parser is None:
        parser = Parser(language)
        parsers[key] = parser
    return parser


def _describe_first_error(root: Node) -> str:
    """Locate the first error or missing node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            label = f"Missing '{node.type}'" if node.is_missing else "Unexpected syntax"
            return f"{label} (line {row + 1}, column {column + 1})"
        # Only subtrees flagged with errors can contain the culprit
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return "Syntax error"
