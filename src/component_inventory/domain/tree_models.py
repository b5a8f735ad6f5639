from __future__ import annotations

"""
Component Tree Data Models.

Presentation-only projection of the component graph. Nodes are rebuilt for
every root and carry no identity of their own: the same component may appear
under several roots or several times under one root.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class ComponentTreeNode:
    """
    Represents one occurrence of a component inside an expanded tree.

    Attributes:
        name: Component name.
        file_path: Relative path of the defining file.
        children: Expanded child occurrences, in usage order.
        note: Set to the cycle marker on a cycle-terminating leaf.
    """
    name: str
    file_path: str
    children: List["ComponentTreeNode"] = field(default_factory=list)
    note: Optional[str] = None

    @property
    def is_cycle(self) -> bool:
        return self.note is not None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the node and its descendants; 'note' only when set.

        Walks the subtree with an explicit stack, so chains deeper than the
        interpreter recursion limit serialize too.
        """
        root = self._shallow_dict()
        stack: List[Tuple["ComponentTreeNode", Dict[str, Any]]] = [(self, root)]
        while stack:
            node, out = stack.pop()
            for child in node.children:
                child_out = child._shallow_dict()
                out["children"].append(child_out)
                stack.append((child, child_out))
        return root

    def _shallow_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "filePath": self.file_path,
            "children": [],
        }
        if self.note:
            out["note"] = self.note
        return out
