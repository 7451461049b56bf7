"""Renderers for schema trees."""

from param_schema.render.serialize import dump_schema_tree, load_schema_tree
from param_schema.render.text import format_fields_as_text, format_fields_for_display
from param_schema.render.tree import RichTreeVisitor, render_rich_tree

__all__ = [
    "RichTreeVisitor",
    "dump_schema_tree",
    "format_fields_as_text",
    "format_fields_for_display",
    "load_schema_tree",
    "render_rich_tree",
]
