from __future__ import annotations

"""
Unit tests for the Component Tree Renderer.

Verifies connector layout, path labels and the cycle marker suffix.
"""

from component_inventory.core.analysis.tree_renderer import render_component_tree
from component_inventory.domain.constants import CYCLE_NOTE
from component_inventory.domain.tree_models import ComponentTreeNode


def _sample_tree():
    return [
        ComponentTreeNode(
            name="Card",
            file_path="ui/Card.tsx",
            children=[
                ComponentTreeNode(
                    name="Header",
                    file_path="ui/Header.tsx",
                    children=[ComponentTreeNode(name="Card", file_path="ui/Card.tsx", note=CYCLE_NOTE)],
                ),
                ComponentTreeNode(name="Button", file_path="ui/Button.tsx"),
            ],
        ),
        ComponentTreeNode(name="Badge", file_path="ui/Badge.tsx"),
    ]


def test_render_with_paths():
    """Roots start at column zero; descendants use box connectors."""
    lines = render_component_tree(_sample_tree())

    assert lines == [
        "Card (ui/Card.tsx)",
        "├── Header (ui/Header.tsx)",
        "│   └── Card (ui/Card.tsx) [Cycle detected]",
        "└── Button (ui/Button.tsx)",
        "Badge (ui/Badge.tsx)",
    ]


def test_render_names_only():
    """Paths can be hidden."""
    lines = render_component_tree(_sample_tree(), show_paths=False)

    assert lines[0] == "Card"
    assert lines[2] == "│   └── Card [Cycle detected]"


def test_render_empty_forest():
    """No roots renders no lines."""
    assert render_component_tree([]) == []
