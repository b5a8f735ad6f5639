from __future__ import annotations

"""
Unit tests for the Domain Data Models.

Verifies the JSON payload shape of records, tree nodes and scan results.
"""

from component_inventory.domain.component_models import (
    ComponentRecord,
    DirectoryAccessError,
    ScanResult,
    ScannerError,
)
from component_inventory.domain.constants import CYCLE_NOTE
from component_inventory.domain.tree_models import ComponentTreeNode


def test_record_add_is_duplicate_free():
    """Edges are kept once, in insertion order."""
    record = ComponentRecord(name="Card", file_path="ui/Card.tsx")
    record.add_child("Button")
    record.add_child("Icon")
    record.add_child("Button")
    record.add_parent("Page")
    record.add_parent("Page")

    assert record.children == ["Button", "Icon"]
    assert record.parents == ["Page"]


def test_record_to_dict_uses_camel_case():
    """Serialized records use 'filePath'."""
    record = ComponentRecord(name="Card", file_path="ui/Card.tsx", children=["Button"])

    assert record.to_dict() == {
        "name": "Card",
        "filePath": "ui/Card.tsx",
        "children": ["Button"],
        "parents": [],
    }


def test_tree_node_note_only_on_cycles():
    """The 'note' key is emitted only for cycle leaves."""
    plain = ComponentTreeNode(name="A", file_path="ui/A.tsx")
    cycle = ComponentTreeNode(name="A", file_path="ui/A.tsx", note=CYCLE_NOTE)

    assert "note" not in plain.to_dict()
    assert plain.is_cycle is False
    assert cycle.to_dict()["note"] == "Cycle detected"
    assert cycle.to_dict()["children"] == []


def test_scan_result_payload_shape():
    """The payload exposes the documented top-level keys."""
    card = ComponentRecord(name="Card", file_path="ui/Card.tsx")
    result = ScanResult(
        success=True,
        generated_at="2024-01-01T00:00:00.000Z",
        total_components=1,
        include_path="ui/",
        components=[card],
        roots=["Card"],
        tree=[ComponentTreeNode(name="Card", file_path="ui/Card.tsx")],
        summary={"files_analyzed": 1},
    )

    payload = result.to_dict()

    assert list(payload) == [
        "success", "generatedAt", "totalComponents", "filters", "components", "roots", "tree",
    ]
    assert payload["filters"] == {"includePath": "ui/"}
    assert payload["tree"] == [{"name": "Card", "filePath": "ui/Card.tsx", "children": []}]
    assert result.get_component("Card") is card
    assert result.get_component("Missing") is None


def test_scan_result_equality_ignores_summary():
    """Statistics do not take part in result comparisons."""
    a = ScanResult(success=True, generated_at="t", total_components=0, include_path="x", summary={"a": 1})
    b = ScanResult(success=True, generated_at="t", total_components=0, include_path="x", summary={"a": 2})

    assert a == b


def test_directory_access_error_message():
    """The error carries the path and reason."""
    err = DirectoryAccessError("/nowhere", "directory does not exist")

    assert isinstance(err, ScannerError)
    assert err.path == "/nowhere"
    assert str(err) == "Cannot access directory '/nowhere': directory does not exist"
