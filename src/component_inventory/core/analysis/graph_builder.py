from __future__ import annotations

"""
Component Graph Builder.

Accumulates per-file registrations and usages into one name-keyed map of
component records. Parents are derived in a separate pass once every file
has been merged, so the map is only symmetric after `derive_parents()`.
"""

import logging
from typing import Dict, Iterable, Optional

from component_inventory.core.analysis.syntax import is_component_name
from component_inventory.domain.component_models import ComponentRecord, FileAnalysis

logger = logging.getLogger(__name__)


class ComponentGraph:
    """
    Explicit accumulator of the global component map.

    Components are keyed by name only: a name defined in several files
    collapses into one record whose file path is the last one registered.
    Not safe for concurrent writers; merge from a single thread.
    """

    def __init__(self) -> None:
        self._components: Dict[str, ComponentRecord] = {}

    @property
    def components(self) -> Dict[str, ComponentRecord]:
        return self._components

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def get(self, name: str) -> Optional[ComponentRecord]:
        return self._components.get(name)

    def register(self, name: str, rel_path: str) -> Optional[ComponentRecord]:
        """
        Register (or re-register) a component definition.

        Args:
            name: Definition name.
            rel_path: Relative path of the defining file.

        Returns:
            Optional[ComponentRecord]: The record, or None for names that do
                                       not follow the component convention.
        """
        if not is_component_name(name):
            return None

        record = self._components.get(name)
        if record is None:
            record = ComponentRecord(name=name, file_path=rel_path)
            self._components[name] = record
            return record

        if record.file_path != rel_path:
            logger.debug(
                f"Component '{name}' redefined in {rel_path} "
                f"(previously {record.file_path}); keeping the latest."
            )
        record.file_path = rel_path
        return record

    def add_children(self, name: str, children: Iterable[str]) -> None:
        record = self._components[name]
        for child in children:
            record.add_child(child)

    def merge(self, analysis: FileAnalysis) -> None:
        """Fold the usages of one analyzed file into the map."""
        if not analysis.ok:
            return
        for name, children in analysis.usages:
            if self.register(name, analysis.source.rel_path) is not None:
                self.add_children(name, children)

    def derive_parents(self) -> None:
        """
        Fill in 'parents' from every record's 'children'.

        Children that were never registered keep their edge but gain no
        reciprocal parent entry. Running the pass twice is harmless.
        """
        for record in self._components.values():
            for child_name in record.children:
                child = self._components.get(child_name)
                if child is not None:
                    child.add_parent(record.name)
