"""Schema tree module: field nodes, the declaration builder and visitors."""

from param_schema.schema_tree.builder import SchemaTreeBuilder, parse_declaration
from param_schema.schema_tree.nodes import REQUIRED_OPTION, FieldNode
from param_schema.schema_tree.visitor import SchemaTreeVisitor

__all__ = [
    "FieldNode",
    "REQUIRED_OPTION",
    "SchemaTreeBuilder",
    "SchemaTreeVisitor",
    "parse_declaration",
]
