from __future__ import annotations

"""
Component Usage Extractor.

Collects the components a definition renders. Nested functions, classes and
wrapped definitions are independent scopes: their markup belongs to their
own registration, so the traversal never enters them.
"""

from typing import List, Optional

from tree_sitter import Node

from component_inventory.core.analysis.syntax import (
    CLASS_DECLARATION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    TAG_TYPES,
    ClassifierRules,
    is_component_name,
    is_function_expression,
    is_ref_forwarding_call,
    jsx_tag_name,
    unwrap_parentheses,
)


def extract_child_components(body: Node, rules: Optional[ClassifierRules] = None) -> List[str]:
    """
    Extract rendered component names from a component body.

    Args:
        body: The definition node (function, class or wrapped function).
              The node itself is never treated as a nested scope.
        rules: Framework conventions used to spot nested wrapper calls.

    Returns:
        List[str]: Capitalized tag names, de-duplicated, in source order.
    """
    rules = rules or ClassifierRules()
    children: List[str] = []

    stack: List[Node] = list(reversed(body.children))
    while stack:
        node = stack.pop()

        if _opens_nested_scope(node, rules):
            continue

        if node.type in TAG_TYPES:
            name = jsx_tag_name(node.child_by_field_name("name"))
            if is_component_name(name) and name not in children:
                children.append(name)

        stack.extend(reversed(node.children))

    return children


def _opens_nested_scope(node: Node, rules: ClassifierRules) -> bool:
    if node.type in FUNCTION_DECLARATION_TYPES or node.type in CLASS_DECLARATION_TYPES:
        return True

    if node.type == "variable_declarator":
        value = unwrap_parentheses(node.child_by_field_name("value"))
        return is_function_expression(value) or is_ref_forwarding_call(value, rules)

    return is_ref_forwarding_call(node, rules)
