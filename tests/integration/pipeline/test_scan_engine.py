from __future__ import annotations

"""
Integration tests for the Scan Engine.

Runs complete scans over temporary source trees and verifies the
inventory invariants: edge symmetry, roots, cycle handling, duplicate
resolution, path filtering and fault tolerance.
"""

from pathlib import Path

import pytest

from component_inventory.core.pipeline.engine import run_scan, scan
from component_inventory.domain.component_models import DirectoryAccessError, ScanResult
from component_inventory.domain.constants import CYCLE_NOTE


def _payload_without_timestamp(result: ScanResult):
    payload = result.to_dict()
    payload.pop("generatedAt")
    return payload


def _assert_symmetric(result: ScanResult) -> None:
    by_name = {c.name: c for c in result.components}
    for component in result.components:
        for child in component.children:
            assert component.name in by_name[child].parents
        for parent in component.parents:
            assert component.name in by_name[parent].children
    assert result.roots == [c.name for c in result.components if not c.parents]
    assert [node.name for node in result.tree] == result.roots


def test_card_renders_button(write_project):
    """A parent and its child under the inclusion fragment."""
    root = write_project({
        "components/ui/Card.tsx": "export function Card() { return <Button />; }\n",
        "components/ui/Button.tsx": "export function Button() { return null; }\n",
    })

    result = scan(str(root))

    assert result.success is True
    assert result.total_components == 2
    assert result.roots == ["Card"]
    assert result.get_component("Card").children == ["Button"]
    assert result.get_component("Button").parents == ["Card"]
    assert result.get_component("Card").file_path == "components/ui/Card.tsx"
    assert result.to_dict()["tree"] == [{
        "name": "Card",
        "filePath": "components/ui/Card.tsx",
        "children": [{"name": "Button", "filePath": "components/ui/Button.tsx", "children": []}],
    }]
    _assert_symmetric(result)


def test_mutual_cycle_has_no_roots(write_project):
    """Two components rendering each other both have a parent."""
    root = write_project({
        "components/ui/A.tsx": "export const A = () => <B />;\n",
        "components/ui/B.tsx": "export const B = () => <A />;\n",
    })

    result = scan(str(root))

    assert result.roots == []
    assert result.tree == []
    assert result.get_component("A").children == ["B"]
    assert result.get_component("A").parents == ["B"]
    assert result.get_component("B").children == ["A"]
    assert result.get_component("B").parents == ["A"]


def test_cycle_below_root_is_marked(write_project):
    """A cycle reached from a root terminates with a marked leaf."""
    root = write_project({
        "components/ui/Shell.tsx": "export function Shell() { return <Menu />; }\n",
        "components/ui/Menu.tsx": "export function Menu() { return <Submenu />; }\n",
        "components/ui/Submenu.tsx": "export function Submenu() { return <Menu />; }\n",
    })

    result = scan(str(root))
    tree = result.to_dict()["tree"]

    assert result.roots == ["Shell"]
    leaf = tree[0]["children"][0]["children"][0]["children"][0]
    assert leaf["name"] == "Menu"
    assert leaf["note"] == CYCLE_NOTE
    assert leaf["children"] == []


def test_duplicate_name_keeps_later_file(write_project):
    """The last collected definition of a name wins."""
    root = write_project({
        "components/ui/a/Tooltip.tsx": "export function Tooltip() { return null; }\n",
        "components/ui/b/Tooltip.tsx": "export function Tooltip() { return null; }\n",
    })

    result = scan(str(root))

    assert result.total_components == 1
    assert result.get_component("Tooltip").file_path == "components/ui/b/Tooltip.tsx"


def test_path_filter_excludes_outside_components(sample_ui_project):
    """Components outside the fragment are dropped along with their edges."""
    result = scan(str(sample_ui_project))

    names = [c.name for c in result.components]
    assert names == ["Button", "Card"]
    assert result.get_component("Card").parents == []
    assert result.roots == ["Card"]
    assert result.summary["components_discovered"] == 3
    _assert_symmetric(result)


def test_custom_include_path(sample_ui_project):
    """A broader fragment keeps the page and its edge to the card."""
    result = scan(str(sample_ui_project), include_path="src/")

    assert result.roots == ["Home"]
    assert result.get_component("Card").parents == ["Home"]
    assert result.to_dict()["filters"] == {"includePath": "src/"}
    _assert_symmetric(result)


def test_scan_is_idempotent(sample_ui_project):
    """Two scans of an unchanged tree agree up to the timestamp."""
    first = scan(str(sample_ui_project), include_path="src/")
    second = scan(str(sample_ui_project), include_path="src/")

    assert _payload_without_timestamp(first) == _payload_without_timestamp(second)


def test_parallel_scan_matches_sequential(write_project):
    """The worker pool preserves merge order and results."""
    files = {
        f"components/ui/Widget{i}.tsx": f"export const Widget{i} = () => <Widget{i + 1} />;\n"
        for i in range(12)
    }
    files["components/ui/a/Widget3.tsx"] = "export function Widget3() { return null; }\n"
    root = write_project(files)

    sequential = scan(str(root), max_workers=1)
    parallel = scan(str(root), max_workers=4)

    assert _payload_without_timestamp(sequential) == _payload_without_timestamp(parallel)


def test_malformed_file_is_skipped(write_project):
    """One broken file never aborts the scan."""
    root = write_project({
        "components/ui/Good.tsx": "export function Good() { return <div />; }\n",
        "components/ui/Broken.tsx": "export function Broken( {\n  return <div\n",
    })

    result = scan(str(root))

    assert [c.name for c in result.components] == ["Good"]
    assert result.summary["files_skipped"] == 1
    assert result.summary["files_analyzed"] == 1


def test_excluded_entries_are_not_scanned(write_project):
    """Stories, test fixtures and dependencies contribute nothing."""
    root = write_project({
        "components/ui/Button.tsx": "export function Button() { return null; }\n",
        "components/ui/Button.stories.tsx": "export function Story() { return <Button />; }\n",
        "components/ui/__tests__/Harness.tsx": "export function Harness() { return <Button />; }\n",
        "node_modules/components/ui/Vendor.tsx": "export function Vendor() { return null; }\n",
    })

    result = scan(str(root))

    assert [c.name for c in result.components] == ["Button"]
    assert result.roots == ["Button"]


def test_missing_root_raises(tmp_path: Path):
    """An inaccessible root aborts the whole scan."""
    with pytest.raises(DirectoryAccessError):
        scan(str(tmp_path / "missing"))


def test_empty_root_gives_empty_inventory(tmp_path: Path):
    """An empty directory is a successful, empty scan."""
    result = scan(str(tmp_path))

    assert result.success is True
    assert result.total_components == 0
    assert result.components == []
    assert result.roots == []
    assert result.tree == []


def test_run_scan_with_base_path(sample_ui_project):
    """File paths can be reported relative to an outer base directory."""
    result = run_scan({
        "input_path": str(sample_ui_project / "src" / "components"),
        "base_path": str(sample_ui_project.parent),
        "include_path": "project/src/components/ui/",
    })

    assert result.get_component("Card").file_path == "project/src/components/ui/Card.tsx"
    assert result.summary["files_collected"] == 2


def test_generated_at_is_utc_iso(tmp_path: Path):
    """Timestamps are ISO-8601 UTC with a 'Z' suffix."""
    result = scan(str(tmp_path))

    assert result.generated_at.endswith("Z")
    assert "T" in result.generated_at


def test_default_filter_ignores_look_alike_directories(write_project):
    """Only the real UI directory is reported under the default fragment."""
    root = write_project({
        "src/legacy-components/ui/OldCard.tsx": "export function OldCard() { return <Button />; }\n",
        "src/components/ui/Button.tsx": "export function Button() { return null; }\n",
    })

    result = scan(str(root))

    assert [c.name for c in result.components] == ["Button"]
    assert result.get_component("Button").parents == []
