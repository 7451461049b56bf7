"""Rich tree rendering of schema trees using the visitor pattern."""

from typing import Any, List

from rich.markup import escape
from rich.tree import Tree

from param_schema.schema_tree.nodes import REQUIRED_OPTION, FieldNode
from param_schema.schema_tree.visitor import SchemaTreeVisitor


def _format_options(node: FieldNode) -> str:
    extra = [f"{key}={value!r}" for key, value in node.options.items() if key != REQUIRED_OPTION]
    return f" [dim]({escape(', '.join(extra))})[/dim]" if extra else ""


class RichTreeVisitor(SchemaTreeVisitor):
    """Visitor that attaches each visited node to a rich Tree.

    Args:
        parent: The rich Tree (or branch) that visited nodes are added to
    """

    def __init__(self, parent: Tree):
        self.parent = parent

    def _label(self, node: FieldNode) -> str:
        flag = "[green]required[/green]" if node.required else "[yellow]optional[/yellow]"
        return (
            f"[cyan]{escape(node.id)}[/cyan]: [magenta]{escape(node.type)}[/magenta] "
            f"{flag}{_format_options(node)}"
        )

    def visit_leaf(self, node: FieldNode) -> Tree:
        return self.parent.add(self._label(node))

    def visit_composite(self, node: FieldNode) -> Tree:
        branch = self.parent.add(self._label(node))
        child_visitor = RichTreeVisitor(branch)
        for child in node.fields:
            child.accept(child_visitor)
        return branch


def render_rich_tree(nodes: List[FieldNode], title: Any = "Schema") -> Tree:
    """Build a rich Tree for a list of top-level field nodes.

    Args:
        nodes: Top-level field nodes
        title: Label of the tree root

    Returns:
        A rich Tree ready to be printed with a Console
    """
    root = Tree(title)
    visitor = RichTreeVisitor(root)
    for node in nodes:
        node.accept(visitor)
    return root
