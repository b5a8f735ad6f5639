from __future__ import annotations

"""
Component Tree Generator.

Computes the roots of a filtered component map and materializes one
displayable tree per root. Cycle detection is path-local: a component that is
already an ancestor on the current path becomes a marked leaf, while the same
component reached through separate branches is expanded each time.
"""

import logging
from typing import FrozenSet, List, Mapping, Optional, Set, Tuple

from component_inventory.domain.component_models import ComponentRecord, ComponentTreeSnapshot
from component_inventory.domain.constants import CYCLE_NOTE
from component_inventory.domain.tree_models import ComponentTreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_component_tree(components: Mapping[str, ComponentRecord]) -> ComponentTreeSnapshot:
    """
    Serialize a filtered component map into flat, root and tree views.

    Args:
        components: Filtered name -> record map (parents already derived).

    Returns:
        ComponentTreeSnapshot: Components, root names and expanded trees.
    """
    roots = find_roots(components)

    tree: List[ComponentTreeNode] = []
    for root_name in roots:
        node = expand_component(root_name, components)
        if node is not None:
            tree.append(node)

    logger.debug(f"Built component tree: {len(components)} components, {len(roots)} roots")

    return ComponentTreeSnapshot(
        components=[component.copy() for component in components.values()],
        roots=roots,
        tree=tree,
    )


def find_roots(components: Mapping[str, ComponentRecord]) -> List[str]:
    """
    Names of components never used as a child inside the map, in map order.

    A self-rendering component counts as its own child and is not a root,
    which keeps roots identical to the components without parents.
    """
    used_as_child: Set[str] = set()
    for component in components.values():
        for child_name in component.children:
            if child_name in components:
                used_as_child.add(child_name)

    return [name for name in components if name not in used_as_child]


def expand_component(
        name: str,
        components: Mapping[str, ComponentRecord],
) -> Optional[ComponentTreeNode]:
    """
    Depth-first expansion of one component.

    Uses an explicit stack so that long chains do not hit the interpreter
    recursion limit.

    Args:
        name: Component to expand.
        components: Name -> record map.

    Returns:
        Optional[ComponentTreeNode]: The expanded node, or None if unknown.
    """
    component = components.get(name)
    if component is None:
        return None

    root = ComponentTreeNode(name=name, file_path=component.file_path)
    stack: List[Tuple[ComponentTreeNode, ComponentRecord, FrozenSet[str]]] = [
        (root, component, frozenset({name}))
    ]

    while stack:
        node, record, ancestors = stack.pop()
        for child_name in record.children:
            child = components.get(child_name)
            if child is None:
                continue

            if child_name in ancestors:
                node.children.append(ComponentTreeNode(
                    name=child_name,
                    file_path=child.file_path,
                    note=CYCLE_NOTE,
                ))
                continue

            child_node = ComponentTreeNode(name=child_name, file_path=child.file_path)
            node.children.append(child_node)
            stack.append((child_node, child, ancestors | {child_name}))

    return root
