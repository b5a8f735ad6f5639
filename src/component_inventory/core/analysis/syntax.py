from __future__ import annotations

"""
Syntax Node Helpers.

Fixed vocabulary of tree-sitter node kinds the scanner understands, plus the
small predicates shared by the classifier and the usage extractor (component
naming convention, markup tag names, framework call/base-class recognition).
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Optional

from tree_sitter import Node

from component_inventory.domain.constants import (
    DEFAULT_COMPONENT_BASE_CLASSES,
    DEFAULT_FRAMEWORK_NAMESPACES,
    DEFAULT_REF_FORWARDING_WRAPPERS,
)

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

FUNCTION_DECLARATION_TYPES: FrozenSet[str] = frozenset({
    "function_declaration",
    "generator_function_declaration",
})

# 'function' is the pre-0.21 grammar name of 'function_expression'
FUNCTION_EXPRESSION_TYPES: FrozenSet[str] = frozenset({
    "arrow_function",
    "function_expression",
    "function",
    "generator_function",
})

CLASS_DECLARATION_TYPES: FrozenSet[str] = frozenset({
    "class_declaration",
    "abstract_class_declaration",
})

VARIABLE_DECLARATION_TYPES: FrozenSet[str] = frozenset({
    "lexical_declaration",
    "variable_declaration",
})

MARKUP_TYPES: FrozenSet[str] = frozenset({
    "jsx_element",
    "jsx_self_closing_element",
    "jsx_fragment",
})

TAG_TYPES: FrozenSet[str] = frozenset({
    "jsx_opening_element",
    "jsx_self_closing_element",
})

_COMPONENT_NAME_RX = re.compile(r"^[A-Z]")


# -----------------------------------------------------------------------------
# FRAMEWORK CONVENTIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassifierRules:
    """
    Framework names that identify component definitions.

    Attributes:
        ref_forwarding_wrappers: Higher-order calls unwrapped to their
                                 first function argument.
        framework_namespaces: Namespaces allowed to qualify wrappers and
                              base classes (e.g. 'React.forwardRef').
        component_base_classes: Superclasses that make a class a component.
        include_nested_definitions: Classify definitions at every depth
                                    instead of module level only.
    """
    ref_forwarding_wrappers: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_REF_FORWARDING_WRAPPERS)
    )
    framework_namespaces: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_FRAMEWORK_NAMESPACES)
    )
    component_base_classes: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_COMPONENT_BASE_CLASSES)
    )
    include_nested_definitions: bool = False


# -----------------------------------------------------------------------------
# PREDICATES
# -----------------------------------------------------------------------------

def is_component_name(name: Optional[str]) -> bool:
    """Components are named with a leading capital letter."""
    return bool(name) and _COMPONENT_NAME_RX.match(name) is not None


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def unwrap_parentheses(node: Optional[Node]) -> Optional[Node]:
    """Strip redundant '( ... )' around an expression."""
    while node is not None and node.type == "parenthesized_expression":
        inner = [c for c in node.named_children if c.type != "comment"]
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def is_function_expression(node: Optional[Node]) -> bool:
    return node is not None and node.type in FUNCTION_EXPRESSION_TYPES


def is_framework_reference(node: Optional[Node], names: FrozenSet[str], rules: ClassifierRules) -> bool:
    """
    Match 'Name' or 'Namespace.Name' against a set of framework names.

    Args:
        node: Identifier or member expression.
        names: Accepted bare names.
        rules: Provides the accepted namespaces.
    """
    if node is None:
        return False
    if node.type == "identifier":
        return node_text(node) in names
    if node.type == "member_expression":
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        return (
            obj is not None
            and obj.type == "identifier"
            and node_text(obj) in rules.framework_namespaces
            and node_text(prop) in names
        )
    return False


def is_ref_forwarding_call(node: Optional[Node], rules: ClassifierRules) -> bool:
    """Recognize 'forwardRef(...)', 'React.forwardRef(...)' and '(forwardRef)(...)'."""
    if node is None or node.type != "call_expression":
        return False
    callee = unwrap_parentheses(node.child_by_field_name("function"))
    return is_framework_reference(callee, rules.ref_forwarding_wrappers, rules)


def first_argument(call: Node) -> Optional[Node]:
    args = call.child_by_field_name("arguments")
    if args is None:
        return None
    for child in args.named_children:
        if child.type != "comment":
            return child
    return None


def superclass_of(class_node: Node) -> Optional[Node]:
    """
    Return the expression after 'extends', if any.

    The TypeScript grammar wraps it in an 'extends_clause' ('value' field);
    the plain script grammar places it directly under 'class_heritage'.
    """
    for child in class_node.children:
        if child.type != "class_heritage":
            continue
        for part in child.named_children:
            if part.type == "extends_clause":
                value = part.child_by_field_name("value")
                if value is None and part.named_children:
                    value = part.named_children[0]
                return value
            if part.type in ("identifier", "member_expression"):
                return part
    return None


def jsx_tag_name(name_node: Optional[Node]) -> Optional[str]:
    """
    Resolve a markup tag name.

    Member tags resolve to their rightmost segment ('Menu.Item' -> 'Item');
    namespaced tags ('svg:rect') and fragments have no name.
    """
    node = name_node
    while node is not None:
        if node.type in ("identifier", "property_identifier", "jsx_identifier"):
            return node_text(node)
        if node.type == "member_expression":
            node = node.child_by_field_name("property")
            continue
        if node.type == "nested_identifier":
            named = node.named_children
            node = named[-1] if named else None
            continue
        return None
    return None


def contains_markup(node: Node) -> bool:
    """True if the subtree holds at least one markup element or fragment."""
    for descendant in iter_descendants(node):
        if descendant.type in MARKUP_TYPES:
            return True
    return False


def iter_descendants(node: Node) -> Iterator[Node]:
    """Pre-order traversal of the strict descendants of a node."""
    stack: List[Node] = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
