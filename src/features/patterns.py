"""
Built-in feature patterns.

Matching is purely syntactic: `Promise` is assumed to be the global Promise,
with no alias or shadowing analysis.
"""

from typing import Tuple

from features.registry import Ancestors, FeatureRegistry
from js.nodes import (
    FIELD_KINDS,
    MEMBER_KINDS,
    NodeKind,
    call_arguments,
    callee_name,
    has_modifier,
    has_private_name,
    is_call_callee,
    is_function_like,
    is_kind,
    is_prototype_access,
    object_keys,
    operator,
    property_name,
    receiver,
    receiver_name,
)

# Constructors that accept an options bag with `cause`, and the index of that argument
ERROR_OPTIONS_INDEX = {
    "Error": 1,
    "EvalError": 1,
    "RangeError": 1,
    "ReferenceError": 1,
    "SyntaxError": 1,
    "TypeError": 1,
    "URIError": 1,
    "AggregateError": 2,
}

LOGICAL_ASSIGNMENT_OPERATORS = {"&&=", "||=", "??="}

TYPE_ONLY_FIELD_MODIFIERS = ("declare", "abstract")


# -----------------------------------------------------------------------------
# Predicate builders
# -----------------------------------------------------------------------------


def static_member(receiver_ident: str, prop: str):
    """`Receiver.prop`, e.g. `Promise.any`."""

    def predicate(node, ancestors: Ancestors) -> bool:
        return property_name(node) == prop and receiver_name(node) == receiver_ident

    return predicate


def instance_method(prop: str):
    """
    `x.prop(...)`, `x["prop"](...)` or `X.prototype.prop`.

    Plain property reads and writes (`x.at = 1`) are not counted, since the
    name alone says nothing about the receiver being an array or string.
    """

    def predicate(node, ancestors: Ancestors) -> bool:
        if property_name(node) != prop:
            return False
        if is_prototype_access(receiver(node)):
            return True
        return bool(ancestors) and is_call_callee(node, ancestors[0])

    return predicate


def binary_operator(*ops: str):
    wanted = set(ops)

    def predicate(node, ancestors: Ancestors) -> bool:
        return operator(node) in wanted

    return predicate


def _is_type_only(node) -> bool:
    """`declare x: T` and `abstract x: T` emit no field at runtime."""
    return any(has_modifier(node, modifier) for modifier in TYPE_ONLY_FIELD_MODIFIERS)


def _is_public_field(node, ancestors: Ancestors) -> bool:
    if has_private_name(node) or _is_type_only(node):
        return False
    return not has_modifier(node, "static")


def _is_static_public_field(node, ancestors: Ancestors) -> bool:
    if has_private_name(node) or _is_type_only(node):
        return False
    return has_modifier(node, "static")


def _is_private_member(node, ancestors: Ancestors) -> bool:
    return has_private_name(node)


def _is_top_level_await(node, ancestors: Ancestors) -> bool:
    """
    `await expr` or `for await (...)` with no enclosing function, arrow
    function or method between the node and the root.
    """
    if is_kind(node, NodeKind.FOR_IN_STATEMENT) and not has_modifier(node, "await"):
        return False
    return not any(is_function_like(ancestor) for ancestor in ancestors)


def _has_error_cause(node, ancestors: Ancestors) -> bool:
    name = callee_name(node)
    if name not in ERROR_OPTIONS_INDEX:
        return False
    args = call_arguments(node)
    index = ERROR_OPTIONS_INDEX[name]
    if len(args) <= index:
        return False
    return "cause" in object_keys(args[index])


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

# Instance methods recognized by property name on a call or prototype access
INSTANCE_METHODS: Tuple[Tuple[str, str], ...] = (
    ("Array.prototype.at", "at"),
    ("Array.prototype.includes", "includes"),
    ("Array.prototype.toReversed", "toReversed"),
    ("Array.prototype.toSorted", "toSorted"),
    ("Array.prototype.toSpliced", "toSpliced"),
    ("Array.prototype.with", "with"),
    ("String.prototype.replaceAll", "replaceAll"),
    ("String.prototype.padStart", "padStart"),
    ("String.prototype.padEnd", "padEnd"),
)

# Static methods recognized by `Receiver.name`
STATIC_MEMBERS: Tuple[Tuple[str, str, str], ...] = (
    ("Promise.any", "Promise", "any"),
    ("Object.entries", "Object", "entries"),
    ("Object.values", "Object", "values"),
    ("Object.hasOwn", "Object", "hasOwn"),
    ("Array.groupBy", "Array", "groupBy"),
)


def register_builtin_features(registry: FeatureRegistry) -> FeatureRegistry:
    """Define every built-in feature on `registry`."""
    for feature, prop in INSTANCE_METHODS:
        registry.define(
            feature,
            MEMBER_KINDS,
            instance_method(prop),
            needs_ancestors=True,
            description=f"Call of .{prop}() or access through a prototype",
        )

    for feature, receiver_ident, prop in STATIC_MEMBERS:
        registry.define(
            feature,
            MEMBER_KINDS,
            static_member(receiver_ident, prop),
            description=f"Reference to {receiver_ident}.{prop}",
        )

    registry.define(
        "Optional chaining (?.)",
        NodeKind.OPTIONAL_CHAIN,
        description="a?.b, a?.[i] or f?.()",
    )
    registry.define(
        "Nullish coalescing (??)",
        NodeKind.BINARY_EXPRESSION,
        binary_operator("??"),
        description="a ?? b",
    )
    registry.define(
        "Logical assignment (&&=, ||=, ??=)",
        NodeKind.AUGMENTED_ASSIGNMENT,
        binary_operator(*LOGICAL_ASSIGNMENT_OPERATORS),
        description="a &&= b, a ||= b, a ??= b",
    )
    registry.define(
        "Class fields",
        FIELD_KINDS,
        _is_public_field,
        description="Instance field declared in a class body",
    )
    registry.define(
        "Static class fields",
        FIELD_KINDS,
        _is_static_public_field,
        description="static field declared in a class body",
    )
    registry.define(
        "Private fields",
        FIELD_KINDS,
        _is_private_member,
        description="#field declared in a class body",
    )
    registry.define(
        "Private methods",
        NodeKind.METHOD_DEFINITION,
        _is_private_member,
        description="#method() declared in a class body",
    )
    registry.define(
        "Top-level await",
        (NodeKind.AWAIT_EXPRESSION, NodeKind.FOR_IN_STATEMENT),
        _is_top_level_await,
        needs_ancestors=True,
        description="await or for await outside of any function body",
    )
    registry.define(
        "Error.cause",
        (NodeKind.NEW_EXPRESSION, NodeKind.CALL_EXPRESSION),
        _has_error_cause,
        description="new Error(message, { cause })",
    )
    return registry


def build_default_registry() -> FeatureRegistry:
    """Frozen registry with all built-in features."""
    return register_builtin_features(FeatureRegistry()).freeze()
