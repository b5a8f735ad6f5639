from __future__ import annotations

"""
Unit tests for the Atomic Analysis Worker.

Verifies that a single file is turned into (component, children) usages and
that read or parse failures are reported instead of raised.
"""

from pathlib import Path
from unittest.mock import patch

from component_inventory.core.analysis.syntax import ClassifierRules
from component_inventory.core.pipeline.stages.worker import analyze_file_task, analyze_source_text
from component_inventory.domain.component_models import SourceFile


def _source(path: Path, rel: str = "ui/File.tsx") -> SourceFile:
    return SourceFile(file_path=str(path), rel_path=rel)


def test_analyze_file_task_collects_usages(tmp_path: Path):
    """Every definition of the file is reported with its children."""
    f = tmp_path / "Card.tsx"
    f.write_text(
        "export function Card() { return <Frame><Title /></Frame>; }\n"
        "export const Title = () => <h2 />;\n"
        "export const useCard = () => null;\n",
        encoding="utf-8",
    )

    analysis = analyze_file_task(_source(f))

    assert analysis.ok is True
    assert analysis.error == ""
    assert analysis.usages == (
        ("Card", ("Frame", "Title")),
        ("Title", ()),
    )


def test_analyze_file_task_reports_read_failure(tmp_path: Path):
    """A missing file is a failed analysis, not an exception."""
    missing = tmp_path / "Gone.tsx"

    analysis = analyze_file_task(_source(missing))

    assert analysis.ok is False
    assert analysis.error.startswith(f"Failed to read {missing}")
    assert analysis.usages == ()


def test_analyze_file_task_reports_invalid_encoding(tmp_path: Path):
    """Non UTF-8 bytes are a read failure."""
    f = tmp_path / "Latin.jsx"
    f.write_bytes(b"const A = '\xff\xfe';\n")

    analysis = analyze_file_task(_source(f))

    assert analysis.ok is False
    assert "Failed to read" in analysis.error


def test_analyze_source_text_reports_parse_failure(tmp_path: Path):
    """Malformed sources produce a parse diagnostic."""
    analysis = analyze_source_text(_source(tmp_path / "Bad.tsx"), "function Bad( { <div")

    assert analysis.ok is False
    assert analysis.error.startswith("Failed to parse")


def test_analyze_source_text_honors_rules(tmp_path: Path):
    """Nested mode surfaces inner definitions."""
    text = "function Outer() { function Inner() { return <Leaf />; } return <Inner />; }\n"
    rules = ClassifierRules(include_nested_definitions=True)

    analysis = analyze_source_text(_source(tmp_path / "Outer.tsx"), text, rules)

    assert analysis.usages == (
        ("Outer", ("Inner",)),
        ("Inner", ("Leaf",)),
    )


def test_analyze_file_task_reports_permission_error(tmp_path: Path):
    """Permission problems surface in the diagnostic."""
    f = tmp_path / "Locked.tsx"
    with patch(
        "component_inventory.core.pipeline.stages.worker.read_source",
        side_effect=PermissionError("Permission denied"),
    ):
        analysis = analyze_file_task(_source(f))

    assert analysis.ok is False
    assert "Permission denied" in analysis.error
