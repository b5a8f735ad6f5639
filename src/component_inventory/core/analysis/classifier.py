from __future__ import annotations

"""
Component Definition Classifier.

Decides which bindings of a module are component definitions. Four
syntactic forms are recognized, each evaluated independently:

- named function declarations with a capitalized name;
- capitalized variables bound to an arrow/function expression whose body
  renders markup;
- capitalized variables bound to a ref-forwarding wrapper call whose first
  argument is a function (the inner function is the body);
- capitalized classes extending the framework's component base classes.
"""

from typing import Iterator, List, Optional

from tree_sitter import Node

from component_inventory.core.analysis.syntax import (
    CLASS_DECLARATION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    VARIABLE_DECLARATION_TYPES,
    ClassifierRules,
    contains_markup,
    first_argument,
    is_component_name,
    is_framework_reference,
    is_function_expression,
    is_ref_forwarding_call,
    iter_descendants,
    node_text,
    superclass_of,
    unwrap_parentheses,
)
from component_inventory.domain.component_models import ComponentDefinition, DefinitionKind


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def classify_definitions(root: Node, rules: Optional[ClassifierRules] = None) -> List[ComponentDefinition]:
    """
    Identify the component definitions of a parsed module.

    Args:
        root: The 'program' node of a syntax tree.
        rules: Framework conventions; defaults to React's.

    Returns:
        List[ComponentDefinition]: Definitions in source order.
    """
    rules = rules or ClassifierRules()
    definitions: List[ComponentDefinition] = []

    candidates = (
        _iter_all_declarations(root)
        if rules.include_nested_definitions
        else _iter_module_declarations(root)
    )

    for node in candidates:
        definition = classify_node(node, rules)
        if definition is not None:
            definitions.append(definition)

    return definitions


def classify_node(node: Node, rules: ClassifierRules) -> Optional[ComponentDefinition]:
    """Match a single declaration node against the definition rules."""
    if node.type in FUNCTION_DECLARATION_TYPES:
        return _classify_function_declaration(node)
    if node.type == "variable_declarator":
        return _classify_variable_declarator(node, rules)
    if node.type in CLASS_DECLARATION_TYPES:
        return _classify_class_declaration(node, rules)
    return None


# -----------------------------------------------------------------------------
# DEFINITION RULES
# -----------------------------------------------------------------------------

def _classify_function_declaration(node: Node) -> Optional[ComponentDefinition]:
    name = node_text(node.child_by_field_name("name"))
    if not is_component_name(name):
        return None
    return ComponentDefinition(name=name, kind=DefinitionKind.FUNCTION_DECLARATION, body=node)


def _classify_variable_declarator(node: Node, rules: ClassifierRules) -> Optional[ComponentDefinition]:
    name_node = node.child_by_field_name("name")
    # Destructuring patterns never name a component
    if name_node is None or name_node.type != "identifier":
        return None
    name = node_text(name_node)
    if not is_component_name(name):
        return None

    value = unwrap_parentheses(node.child_by_field_name("value"))
    if value is None:
        return None

    if is_function_expression(value):
        # Guards against capitalized helpers that never render markup
        if not contains_markup(value):
            return None
        return ComponentDefinition(name=name, kind=DefinitionKind.FUNCTION_BINDING, body=value)

    if is_ref_forwarding_call(value, rules):
        inner = unwrap_parentheses(first_argument(value))
        if not is_function_expression(inner):
            return None
        return ComponentDefinition(name=name, kind=DefinitionKind.REF_FORWARDING_BINDING, body=inner)

    return None


def _classify_class_declaration(node: Node, rules: ClassifierRules) -> Optional[ComponentDefinition]:
    name = node_text(node.child_by_field_name("name"))
    if not is_component_name(name):
        return None
    superclass = unwrap_parentheses(superclass_of(node))
    if not is_framework_reference(superclass, rules.component_base_classes, rules):
        return None
    return ComponentDefinition(name=name, kind=DefinitionKind.CLASS_DECLARATION, body=node)


# -----------------------------------------------------------------------------
# CANDIDATE ENUMERATION
# -----------------------------------------------------------------------------

def _iter_module_declarations(root: Node) -> Iterator[Node]:
    """Module-level declarations, looking through 'export' wrappers."""
    for statement in root.named_children:
        if statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            if declaration is None:
                continue
            statement = declaration

        if statement.type in VARIABLE_DECLARATION_TYPES:
            for child in statement.named_children:
                if child.type == "variable_declarator":
                    yield child
            continue

        yield statement


def _iter_all_declarations(root: Node) -> Iterator[Node]:
    """Declarations at every depth, in document order."""
    for node in iter_descendants(root):
        if (
            node.type in FUNCTION_DECLARATION_TYPES
            or node.type in CLASS_DECLARATION_TYPES
            or node.type == "variable_declarator"
        ):
            yield node
