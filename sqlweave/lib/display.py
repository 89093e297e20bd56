"""
Rich rendering of a parsed AST, for inspecting how a template was read.
"""

from rich.markup import escape
from rich.tree import Tree
from sqlweave.models.dataModel import ConditionalNode, LiteralNode, Node, SequenceNode


def _node_add(parent: Tree, node: Node) -> None:
    if isinstance(node, LiteralNode):
        parent.add(f"[green]{escape(node.text)}[/green]")
    elif isinstance(node, ConditionalNode):
        predicate: str = escape(" ".join(node.predicate))
        branch: Tree = parent.add(f"[bold cyan]if[/bold cyan] [yellow]{predicate}[/yellow]")
        _node_add(branch.add("[bold cyan]then[/bold cyan]"), node.then_branch)
        if node.else_branch is not None:
            _node_add(branch.add("[bold cyan]else[/bold cyan]"), node.else_branch)
    elif isinstance(node, SequenceNode):
        for child in node.children:
            if isinstance(child, SequenceNode):
                _node_add(parent.add("[dim]scope[/dim]"), child)
            else:
                _node_add(parent, child)
    else:
        raise TypeError(f"Unknown AST node type: {type(node).__name__}")


def syntaxTree_show(node: Node, title: str = "template") -> Tree:
    """Build a rich Tree showing the structure of an AST.

    Args:
        node: AST root
        title: Label of the tree root

    Returns:
        rich Tree ready to be printed on a Console
    """
    tree: Tree = Tree(f"[bold]{escape(title)}[/bold]")
    _node_add(tree, node)
    return tree
