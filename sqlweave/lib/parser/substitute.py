"""
Substitution pass over a parsed AST.

Replaces, in place, every literal token and predicate token that matches a
lookup key with the textual form of the key's value. Substitution is a single
pass: replacement text is never looked up again.

Every conditional is validated, including those inside branches that
evaluation will later discard.
"""

from typing import Any, Mapping
from sqlweave.lib.errors import (
    EmptyPredicateError,
    InvalidPredicateError,
    MultiTokenPredicateError,
)
from sqlweave.models.dataModel import ConditionalNode, LiteralNode, Node, SequenceNode

BOOLEAN_LITERALS = ("true", "false")


def value_format(value: Any) -> str:
    """Render a substitution value as template text.

    Booleans become ``true``/``false``, None becomes ``null``, floats with an
    integral value below 1e21 drop their fractional part (``1.0`` becomes
    ``1``) and anything else is rendered with ``str()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def predicate_substitute(node: ConditionalNode, lookup: Mapping[str, Any]) -> None:
    """Substitute into a conditional's predicate and validate it.

    Args:
        node: Conditional whose predicate is checked
        lookup: Substitution table keyed by marker-prefixed names

    Raises:
        EmptyPredicateError: If the predicate has no token
        MultiTokenPredicateError: If the predicate has more than one token
        InvalidPredicateError: If the token is not ``true`` or ``false`` after
            substitution
    """
    if not node.predicate:
        raise EmptyPredicateError("predicate expression not found")
    if len(node.predicate) > 1:
        raise MultiTokenPredicateError(
            f"multi-token predicate is not supported: {' '.join(node.predicate)}"
        )

    token: str = node.predicate[0]
    if token in lookup:
        node.predicate = [value_format(lookup[token])]

    if node.predicate[0].lower() not in BOOLEAN_LITERALS:
        raise InvalidPredicateError(
            f"predicate must be a boolean expression, got '{node.predicate[0]}'"
        )


def vars_substitute(node: Node, lookup: Mapping[str, Any]) -> None:
    """Perform recursive variable substitution on an AST.

    Args:
        node: AST root
        lookup: Substitution table keyed by marker-prefixed names

    Raises:
        TemplateError: If any conditional's predicate is invalid
    """
    if isinstance(node, LiteralNode):
        if node.text in lookup:
            node.text = value_format(lookup[node.text])
    elif isinstance(node, ConditionalNode):
        predicate_substitute(node, lookup)
        vars_substitute(node.then_branch, lookup)
        if node.else_branch is not None:
            vars_substitute(node.else_branch, lookup)
    elif isinstance(node, SequenceNode):
        for child in node.children:
            vars_substitute(child, lookup)
    else:
        raise TypeError(f"Unknown AST node type: {type(node).__name__}")
