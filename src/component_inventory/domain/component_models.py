from __future__ import annotations

"""
Component Inventory Domain Data Models.

Defines the entities exchanged between the scanning stages (source files,
component definitions, per-file analyses, component records) and the final
result object returned to the interface layers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from component_inventory.domain.tree_models import ComponentTreeNode

# -----------------------------------------------------------------------------
# ERRORS
# -----------------------------------------------------------------------------

class ScannerError(Exception):
    """Base class for failures that abort a whole scan."""


class DirectoryAccessError(ScannerError):
    """The root directory is missing or cannot be listed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot access directory '{path}': {reason}")
        self.path = path
        self.reason = reason

# -----------------------------------------------------------------------------
# INPUT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceFile:
    """
    A file eligible for analysis.

    Attributes:
        file_path: Absolute filesystem path.
        rel_path: POSIX-style path relative to the scan base directory.
    """
    file_path: str
    rel_path: str


class DefinitionKind(Enum):
    """Syntactic forms recognized as component definitions."""
    FUNCTION_DECLARATION = "function_declaration"
    FUNCTION_BINDING = "function_binding"
    REF_FORWARDING_BINDING = "ref_forwarding_binding"
    CLASS_DECLARATION = "class_declaration"


@dataclass(frozen=True)
class ComponentDefinition:
    """
    A binding classified as a component definition.

    Attributes:
        name: Registered identity (the outer binding name).
        kind: Which definition rule matched.
        body: Syntax node whose descendants form the component body.
    """
    name: str
    kind: DefinitionKind
    body: Any = field(compare=False, repr=False)


@dataclass(frozen=True)
class FileAnalysis:
    """
    Outcome of analyzing a single file. Holds no shared state.

    Attributes:
        source: The analyzed file.
        ok: False when the file could not be read or parsed.
        error: Diagnostic message of the failure.
        usages: (component name, rendered child names) per definition,
                in source order.
    """
    source: SourceFile
    ok: bool
    error: str = ""
    usages: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()

# -----------------------------------------------------------------------------
# GRAPH MODELS
# -----------------------------------------------------------------------------

@dataclass
class ComponentRecord:
    """
    Central entity of the component graph, keyed globally by name.

    Children and parents are insertion-ordered, duplicate-free lists so that
    serialized output is stable across processes.
    """
    name: str
    file_path: str
    children: List[str] = field(default_factory=list)
    parents: List[str] = field(default_factory=list)

    def add_child(self, name: str) -> None:
        if name not in self.children:
            self.children.append(name)

    def add_parent(self, name: str) -> None:
        if name not in self.parents:
            self.parents.append(name)

    def copy(self) -> "ComponentRecord":
        return ComponentRecord(
            name=self.name,
            file_path=self.file_path,
            children=list(self.children),
            parents=list(self.parents),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "filePath": self.file_path,
            "children": list(self.children),
            "parents": list(self.parents),
        }


@dataclass(frozen=True)
class ComponentTreeSnapshot:
    """
    Serialized view of a filtered component map.

    Attributes:
        components: Flat component records.
        roots: Names of components without parents in the filtered set.
        tree: One expanded tree per root.
    """
    components: List[ComponentRecord]
    roots: List[str]
    tree: List[ComponentTreeNode]

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResult:
    """
    Unified result object of a complete scan.

    Attributes:
        success: Always True for a returned result; fatal failures raise.
        generated_at: UTC ISO-8601 timestamp of the scan.
        total_components: Number of components in the filtered map.
        include_path: Inclusion fragment used by the path filter.
        components: Flat filtered component list.
        roots: Root component names.
        tree: Expanded trees, one per root.
        summary: Execution statistics (not part of the serialized payload).
    """
    success: bool
    generated_at: str
    total_components: int
    include_path: str
    components: List[ComponentRecord] = field(default_factory=list)
    roots: List[str] = field(default_factory=list)
    tree: List[ComponentTreeNode] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Produce the JSON-compatible inventory payload."""
        return {
            "success": self.success,
            "generatedAt": self.generated_at,
            "totalComponents": self.total_components,
            "filters": {"includePath": self.include_path},
            "components": [c.to_dict() for c in self.components],
            "roots": list(self.roots),
            "tree": [node.to_dict() for node in self.tree],
        }

    def get_component(self, name: str) -> Optional[ComponentRecord]:
        for component in self.components:
            if component.name == name:
                return component
        return None
