#!/usr/bin/env python3
"""Example demonstrating schema tree construction and traversal.

This example builds a schema tree from a declaration and walks it with a
custom visitor, the way a downstream request-validation layer would.
"""

from rich.console import Console

from param_schema.declaration.dsl import block, optional, requires
from param_schema.render.tree import render_rich_tree
from param_schema.schema_tree.builder import parse_declaration
from param_schema.schema_tree.visitor import SchemaTreeVisitor


def create_example_declaration():
    """Create an example declaration for a search endpoint."""
    return block(
        requires("query", "string"),
        optional("limit", "integer", {"default": 10, "max": 100}),
        optional("sort", "string", {"default": "relevance"}),
        requires(
            "profile",
            "map",
            do=[
                requires("access_key", "string"),
                requires("secret_key", "string"),
                optional(
                    "tags",
                    "list",
                    do=[requires("name", "string"), optional("value", "string")],
                ),
            ],
        ),
    )


class RequiredPathsVisitor(SchemaTreeVisitor):
    """Collects dotted paths of every field that must be present."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def _path(self, node):
        return f"{self.prefix}{node.id}"

    def visit_leaf(self, node):
        return [self._path(node)] if node.required else []

    def visit_composite(self, node):
        if not node.required:
            return []
        paths = [self._path(node)]
        child_visitor = RequiredPathsVisitor(prefix=f"{self._path(node)}.")
        for child in node.fields:
            paths.extend(child.accept(child_visitor))
        return paths


def main():
    console = Console()
    nodes = parse_declaration(create_example_declaration())

    console.print(render_rich_tree(nodes, title="[bold]search parameters[/bold]"))

    visitor = RequiredPathsVisitor()
    required_paths = []
    for node in nodes:
        required_paths.extend(node.accept(visitor))

    console.print("\nRequired fields:")
    for path in required_paths:
        console.print(f"  - {path}")


if __name__ == "__main__":
    main()
