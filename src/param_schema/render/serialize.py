"""JSON serialization of schema trees."""

from typing import List, Optional

from pydantic import TypeAdapter

from param_schema.schema_tree.nodes import FieldNode

_FOREST_ADAPTER = TypeAdapter(List[FieldNode])


def dump_schema_tree(nodes: List[FieldNode], indent: Optional[int] = 2) -> str:
    """Serialize top-level field nodes to JSON text."""
    return _FOREST_ADAPTER.dump_json(nodes, indent=indent).decode("utf-8")


def load_schema_tree(text: str) -> List[FieldNode]:
    """Load field nodes previously written by dump_schema_tree."""
    return _FOREST_ADAPTER.validate_json(text)
