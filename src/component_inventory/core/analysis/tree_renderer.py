from __future__ import annotations

"""
Component Tree Renderer.

Converts expanded component trees into visual ASCII lines for terminal
previews and text reports.
"""

from typing import List, Sequence, Tuple

from component_inventory.domain.tree_models import ComponentTreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_component_tree(
        nodes: Sequence[ComponentTreeNode],
        show_paths: bool = True,
) -> List[str]:
    """
    Render root trees as ASCII lines.

    Each root starts at column zero; descendants use the standard
    connectors (├──, └──).

    Args:
        nodes: Root nodes to render.
        show_paths: Append the defining file path to each component.

    Returns:
        List[str]: Rendered lines.
    """
    lines: List[str] = []
    for node in nodes:
        lines.append(_format_label(node, show_paths))
        render_tree_structure(node.children, lines, prefix="", show_paths=show_paths)
    return lines


def render_tree_structure(
        children: Sequence[ComponentTreeNode],
        lines: List[str],
        prefix: str = "",
        show_paths: bool = True,
) -> None:
    """
    Append the lines of a list of sibling nodes and all their descendants.

    Uses an explicit stack of (node, prefix, is_last) entries so that deep
    trees render without recursion.

    Args:
        children: Sibling nodes at the current level.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix of the sibling level.
        show_paths: Append the defining file path to each component.
    """
    stack: List[Tuple[ComponentTreeNode, str, bool]] = _sibling_entries(children, prefix)

    while stack:
        node, node_prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        lines.append(f"{node_prefix}{connector}{_format_label(node, show_paths)}")

        if node.children:
            new_prefix = node_prefix + ("    " if is_last else "│   ")
            stack.extend(_sibling_entries(node.children, new_prefix))


def _sibling_entries(
        children: Sequence[ComponentTreeNode],
        prefix: str,
) -> List[Tuple[ComponentTreeNode, str, bool]]:
    """Stack entries for a sibling list, reversed so the first pops first."""
    total = len(children)
    return [
        (node, prefix, i == total - 1)
        for i, node in reversed(list(enumerate(children)))
    ]


def _format_label(node: ComponentTreeNode, show_paths: bool) -> str:
    label = f"{node.name} ({node.file_path})" if show_paths else node.name
    if node.note:
        label += f" [{node.note}]"
    return label
