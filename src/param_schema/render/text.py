"""Plain text rendering of schema trees."""

from typing import List, Tuple

from param_schema.schema_tree.nodes import REQUIRED_OPTION, FieldNode
from param_schema.schema_tree.visitor import SchemaTreeVisitor

Row = Tuple[str, str, str, str]


class TextRowsVisitor(SchemaTreeVisitor):
    """Visitor that collects display rows with indentation by nesting level."""

    def __init__(self, indent: int = 0):
        self.indent = indent

    def _row(self, node: FieldNode) -> Row:
        prefix = "  " * self.indent
        required_str = "required" if node.required else "optional"
        options_str = ", ".join(
            f"{key}={value!r}" for key, value in node.options.items() if key != REQUIRED_OPTION
        )
        return (f"{prefix}{node.id}", node.type, required_str, options_str)

    def visit_leaf(self, node: FieldNode) -> List[Row]:
        return [self._row(node)]

    def visit_composite(self, node: FieldNode) -> List[Row]:
        rows = [self._row(node)]
        child_visitor = TextRowsVisitor(self.indent + 1)
        for child in node.fields:
            rows.extend(child.accept(child_visitor))
        return rows


def format_fields_for_display(nodes: List[FieldNode]) -> List[Row]:
    """Format field nodes and their children for display.

    Args:
        nodes: Top-level field nodes

    Returns:
        List of tuples (name, type, required, options) in tree order
    """
    visitor = TextRowsVisitor()
    rows: List[Row] = []
    for node in nodes:
        rows.extend(node.accept(visitor))
    return rows


def format_fields_as_text(nodes: List[FieldNode], title: str = "Schema") -> str:
    """Render field nodes as an aligned plain text listing."""
    lines = [title, "=" * 80, ""]
    for name, type_tag, required, options in format_fields_for_display(nodes):
        lines.append(f"{name:30} {type_tag:20} {required:10} {options}".rstrip())
    return "\n".join(lines)
