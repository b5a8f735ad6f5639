from __future__ import annotations

"""
Component Path Filter.

Restricts the global component map to the components defined under a
directory fragment. The result is an independent snapshot: records are
copied and edges pointing outside the kept set are dropped.
"""

from typing import Dict, Mapping

from component_inventory.domain.component_models import ComponentRecord
from component_inventory.infra.fs import to_posix_path


def should_include_component(component: ComponentRecord, include_path: str) -> bool:
    """
    Check whether the defining file path contains the inclusion fragment.

    The fragment must start on a path segment boundary, so 'components/ui/'
    matches 'src/components/ui/Button.tsx' but not
    'src/legacy-components/ui/Button.tsx'.
    """
    if not component.file_path:
        return False
    fragment = "/" + to_posix_path(include_path).lstrip("/")
    return fragment in "/" + to_posix_path(component.file_path).lstrip("/")


def filter_component_map(
        components: Mapping[str, ComponentRecord],
        include_path: str,
) -> Dict[str, ComponentRecord]:
    """
    Project the global map onto the components under `include_path`.

    Args:
        components: Global name -> record map. Not modified.
        include_path: Relative path fragment, e.g. 'components/ui/'.

    Returns:
        Dict[str, ComponentRecord]: Copied records with 'children' and
                                    'parents' intersected with the kept names.
    """
    filtered: Dict[str, ComponentRecord] = {
        name: component.copy()
        for name, component in components.items()
        if should_include_component(component, include_path)
    }

    for component in filtered.values():
        component.children = [c for c in component.children if c in filtered]
        component.parents = [p for p in component.parents if p in filtered]

    return filtered
