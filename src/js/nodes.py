"""
Closed set of syntax node kinds that feature patterns can select on, plus
accessor functions used by pattern predicates.

Predicates never read arbitrary node attributes; they go through the
accessors below, which return None when a node does not have the expected
shape.
"""

from enum import Enum
from typing import FrozenSet, List, Optional

from js.utils import node_text


class NodeKind(Enum):
    """Tree-sitter node types that feature patterns may match."""

    MEMBER_EXPRESSION = "member_expression"
    SUBSCRIPT_EXPRESSION = "subscript_expression"
    OPTIONAL_CHAIN = "optional_chain"
    BINARY_EXPRESSION = "binary_expression"
    AUGMENTED_ASSIGNMENT = "augmented_assignment_expression"
    FIELD_DEFINITION = "field_definition"  # JavaScript grammar
    PUBLIC_FIELD_DEFINITION = "public_field_definition"  # TypeScript grammar
    METHOD_DEFINITION = "method_definition"
    AWAIT_EXPRESSION = "await_expression"
    FOR_IN_STATEMENT = "for_in_statement"  # also `for ... of` and `for await`
    NEW_EXPRESSION = "new_expression"
    CALL_EXPRESSION = "call_expression"


# Class field definitions in either grammar
FIELD_KINDS = (NodeKind.FIELD_DEFINITION, NodeKind.PUBLIC_FIELD_DEFINITION)

# Property access: `a.b` and `a["b"]`
MEMBER_KINDS = (NodeKind.MEMBER_EXPRESSION, NodeKind.SUBSCRIPT_EXPRESSION)

# Nodes that open a new callable body. `function` is the pre-0.21 name of
# `function_expression` in tree-sitter-javascript.
FUNCTION_LIKE_TYPES: FrozenSet[str] = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "arrow_function",
        "generator_function",
        "generator_function_declaration",
        "method_definition",
    }
)

# Name node types for `#name` members
_PRIVATE_NAME_TYPES = {"private_property_identifier"}

# Name node types for member access properties
_PROPERTY_NAME_TYPES = {"property_identifier", "private_property_identifier", "identifier"}


def is_kind(node, kind: NodeKind) -> bool:
    return node is not None and node.type == kind.value


def is_function_like(node) -> bool:
    return node.type in FUNCTION_LIKE_TYPES


def field_child(node, name: str):
    """Child at a grammar field, or None."""
    return node.child_by_field_name(name)


def operator(node) -> Optional[str]:
    """Operator token of a binary or assignment expression."""
    op = field_child(node, "operator")
    return op.type if op is not None else None


def has_modifier(node, modifier: str) -> bool:
    """Whether a declaration carries an unnamed keyword child such as `static`."""
    return any(not child.is_named and child.type == modifier for child in node.children)


# -----------------------------------------------------------------------------
# Member access
# -----------------------------------------------------------------------------


def is_member_access(node) -> bool:
    return any(is_kind(node, kind) for kind in MEMBER_KINDS)


def string_value(node) -> Optional[str]:
    """Contents of a string literal without its quotes, None for anything else."""
    if node is None or node.type != "string":
        return None
    return node_text(node)[1:-1]


def property_name(node) -> Optional[str]:
    """`b` for `a.b`, `a?.b` and `a["b"]`, None for other shapes (including computed `a[b]`)."""
    if is_kind(node, NodeKind.SUBSCRIPT_EXPRESSION):
        return string_value(field_child(node, "index"))
    if not is_kind(node, NodeKind.MEMBER_EXPRESSION):
        return None
    prop = field_child(node, "property")
    if prop is None or prop.type not in _PROPERTY_NAME_TYPES:
        return None
    return node_text(prop)


def receiver(node):
    """The `a` in `a.b` or `a["b"]`."""
    if not is_member_access(node):
        return None
    return field_child(node, "object")


def receiver_name(node) -> Optional[str]:
    """Identifier name of the receiver (`Promise` in `Promise.any`), None if not an identifier."""
    obj = receiver(node)
    if obj is None or obj.type != "identifier":
        return None
    return node_text(obj)


def is_prototype_access(node) -> bool:
    """`X.prototype`"""
    return property_name(node) == "prototype"


def is_call_callee(node, parent) -> bool:
    """Whether `node` is the function being called by `parent`."""
    if not is_kind(parent, NodeKind.CALL_EXPRESSION):
        return False
    return field_child(parent, "function") == node


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------


def member_name_node(node):
    """Name node of a class field or method (`name` in TypeScript, `property` in JavaScript)."""
    name = field_child(node, "name")
    if name is None:
        name = field_child(node, "property")
    return name


def has_private_name(node) -> bool:
    name = member_name_node(node)
    return name is not None and name.type in _PRIVATE_NAME_TYPES


# -----------------------------------------------------------------------------
# Calls and construction
# -----------------------------------------------------------------------------


def callee_name(node) -> Optional[str]:
    """Identifier called or constructed: `Error` in `new Error()` or `Error()`."""
    if is_kind(node, NodeKind.NEW_EXPRESSION):
        target = field_child(node, "constructor")
    elif is_kind(node, NodeKind.CALL_EXPRESSION):
        target = field_child(node, "function")
    else:
        return None
    if target is None or target.type != "identifier":
        return None
    return node_text(target)


def call_arguments(node) -> List:
    """Argument expressions of a call or `new` expression, comments excluded."""
    args = field_child(node, "arguments")
    if args is None or args.type != "arguments":
        return []
    return [child for child in args.named_children if child.type != "comment"]


def object_keys(node) -> List[str]:
    """Literal keys of an object literal (`{a: 1, b, 'c': 2}` -> ['a', 'b', 'c'])."""
    if node is None or node.type != "object":
        return []
    keys = []
    for child in node.named_children:
        if child.type == "shorthand_property_identifier":
            keys.append(node_text(child))
        elif child.type in ("pair", "method_definition"):
            key = field_child(child, "key") if child.type == "pair" else field_child(child, "name")
            if key is None:
                continue
            text = string_value(key)
            keys.append(node_text(key) if text is None else text)
    return keys
