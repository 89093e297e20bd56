"""
Evaluator: renders a substituted AST to text.

Sequences join the non-empty results of their children with single spaces, so
any whitespace in the template collapses to one space in the output.
"""

from sqlweave.models.dataModel import ConditionalNode, LiteralNode, Node, SequenceNode


def syntaxTree_evaluate(node: Node) -> str:
    """Return the text an AST evaluates to.

    The AST must have been through the substitution pass, which guarantees
    every predicate is ``true`` or ``false``.
    """
    if isinstance(node, LiteralNode):
        return node.text
    if isinstance(node, ConditionalNode):
        if node.predicate[0].lower() == "true":
            return syntaxTree_evaluate(node.then_branch)
        if node.else_branch is not None:
            return syntaxTree_evaluate(node.else_branch)
        return ""
    if isinstance(node, SequenceNode):
        parts: list[str] = []
        for child in node.children:
            part: str = syntaxTree_evaluate(child)
            if part:
                parts.append(part)
        return " ".join(parts)
    raise TypeError(f"Unknown AST node type: {type(node).__name__}")
