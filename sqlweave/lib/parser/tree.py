"""
Tree parser: converts a token tree into an AST.

A (sub)tree whose first token is ``[if]`` becomes a conditional, wrapped in a
single-child SequenceNode so that parsing any tree always yields one node.
Every other tree becomes a SequenceNode of its parsed tokens.

Conditional layout:
    [if] <predicate> [then] <then tokens...> [else] <else tokens...>

The ``[else]`` clause is optional. Nested scopes may appear anywhere in the
then/else clauses and are parsed recursively.
"""

from sqlweave.lib.errors import (
    MalformedExpressionError,
    MissingPredicateError,
    MissingThenClauseError,
    NotConditional,
)
from sqlweave.models.dataModel import (
    ConditionalNode,
    Keyword,
    LiteralNode,
    LiteralToken,
    Node,
    SequenceNode,
    TokenTree,
    keyword_check,
)

MAX_DEPTH = 200


def _literal_is(token: object, keyword: Keyword) -> bool:
    return isinstance(token, LiteralToken) and token.text == keyword.value


def conditional_detect(tree: TokenTree) -> None:
    """Check whether a token tree is a valid conditional.

    Args:
        tree: Token tree to inspect

    Raises:
        MalformedExpressionError: If the tree has no tokens
        NotConditional: If the tree does not start with ``[if]``
        MissingPredicateError: If ``[if]`` is not followed by a literal,
            non-keyword token
        MissingThenClauseError: If the tree has no ``[then]``
    """
    tokens = tree.tokens
    if not tokens:
        raise MalformedExpressionError("expression with empty token list")

    if not _literal_is(tokens[0], Keyword.IF):
        raise NotConditional()

    if (
        len(tokens) < 2
        or not isinstance(tokens[1], LiteralToken)
        or keyword_check(tokens[1].text)
    ):
        raise MissingPredicateError(f"{Keyword.IF.value} must be followed by a predicate")

    then_index: int = 0
    for index, token in enumerate(tokens):
        if _literal_is(token, Keyword.THEN):
            then_index = index
            break
    if then_index <= 0:
        raise MissingThenClauseError(
            f"{Keyword.IF.value} must be followed by a {Keyword.THEN.value} clause"
        )


def conditional_parse(
    tree: TokenTree, depth: int = 0, max_depth: int = MAX_DEPTH
) -> SequenceNode:
    """Parse a token tree already validated by conditional_detect.

    Args:
        tree: Token tree starting with ``[if]``
        depth: Scope nesting level of ``tree``
        max_depth: Deepest nesting level accepted

    Returns:
        SequenceNode holding the ConditionalNode as its only child

    Raises:
        MalformedExpressionError: On a nested scope inside the predicate, an
            ``[else]`` before ``[then]``, or a repeated ``[then]``/``[else]``
    """
    conditional: ConditionalNode = ConditionalNode(predicate=[])
    # None while still reading the predicate
    clause: SequenceNode | None = None

    for token in tree.tokens[1:]:
        if isinstance(token, TokenTree):
            if clause is None:
                raise MalformedExpressionError(
                    f"nested expression inside {Keyword.IF.value} predicate"
                )
            clause.children.append(syntaxTree_parse(token, depth + 1, max_depth))
            continue

        if token.text == Keyword.THEN.value:
            if clause is not None:
                raise MalformedExpressionError(
                    f"duplicate {Keyword.THEN.value} in conditional"
                )
            clause = conditional.then_branch
        elif token.text == Keyword.ELSE.value:
            if clause is None:
                raise MalformedExpressionError(
                    f"{Keyword.ELSE.value} before {Keyword.THEN.value} in conditional"
                )
            if conditional.else_branch is not None:
                raise MalformedExpressionError(
                    f"duplicate {Keyword.ELSE.value} in conditional"
                )
            conditional.else_branch = SequenceNode()
            clause = conditional.else_branch
        elif clause is None:
            conditional.predicate.append(token.text)
        else:
            clause.children.append(LiteralNode(token.text))

    return SequenceNode(children=[conditional])


def syntaxTree_parse(
    tree: TokenTree, depth: int = 0, max_depth: int = MAX_DEPTH
) -> Node:
    """Convert a token tree into a single AST node, recursively.

    Args:
        tree: Token tree produced by the tokenizer
        depth: Scope nesting level of ``tree``, 0 for the template root
        max_depth: Deepest nesting level accepted

    Returns:
        The AST root for this tree

    Raises:
        TemplateError: Any structural error found in this tree or its subtrees,
            including nesting deeper than max_depth
    """
    if depth > max_depth:
        raise MalformedExpressionError(
            f"nesting too deep: more than {max_depth} nested scopes"
        )

    try:
        conditional_detect(tree)
    except NotConditional:
        is_conditional: bool = False
    else:
        is_conditional = True

    if is_conditional:
        return conditional_parse(tree, depth, max_depth)

    sequence: SequenceNode = SequenceNode()
    for token in tree.tokens:
        if isinstance(token, TokenTree):
            sequence.children.append(syntaxTree_parse(token, depth + 1, max_depth))
        else:
            sequence.children.append(LiteralNode(token.text))
    return sequence
