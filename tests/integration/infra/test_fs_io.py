from __future__ import annotations

"""
Integration tests for the FileSystem Infrastructure Layer.

Verifies path normalization, POSIX identifiers and artifact persistence.
"""

import os
from pathlib import Path

from component_inventory.infra.fs import (
    normalize_path,
    relative_posix_path,
    to_posix_path,
    write_text_lines,
)


def test_normalize_path_uses_fallback_for_blank(tmp_path: Path):
    """Empty input resolves to the fallback directory."""
    assert normalize_path("  ", str(tmp_path)) == str(tmp_path)
    assert normalize_path(None, str(tmp_path)) == str(tmp_path)


def test_normalize_path_expands_user():
    """'~' resolves to an absolute home path."""
    resolved = normalize_path("~", "/unused")

    assert os.path.isabs(resolved)
    assert resolved == os.path.abspath(os.path.expanduser("~"))


def test_relative_posix_path(tmp_path: Path):
    """Identifiers are relative and use forward slashes."""
    target = tmp_path / "src" / "ui" / "Card.tsx"

    assert relative_posix_path(str(target), str(tmp_path)) == "src/ui/Card.tsx"
    assert to_posix_path("src\\ui\\Card.tsx") == "src/ui/Card.tsx"


def test_write_text_lines_creates_parents(tmp_path: Path):
    """Missing directories are created and a trailing newline is added."""
    target = tmp_path / "reports" / "tree.txt"

    write_text_lines(str(target), ["Card", "└── Button"])

    assert target.read_text(encoding="utf-8") == "Card\n└── Button\n"
