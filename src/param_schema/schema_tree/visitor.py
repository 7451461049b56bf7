"""Visitor pattern for traversing schema tree nodes.

Downstream consumers (validation rule builders, renderers, ...) implement this
interface to walk leaf and composite nodes.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from param_schema.schema_tree.nodes import FieldNode


class SchemaTreeVisitor(ABC):
    """Abstract base class for schema tree visitors."""

    @abstractmethod
    def visit_leaf(self, node: "FieldNode") -> Any:
        """Visit a leaf (scalar) field node.

        Args:
            node: The leaf node to visit

        Returns:
            Visitor-specific result
        """
        pass

    @abstractmethod
    def visit_composite(self, node: "FieldNode") -> Any:
        """Visit a composite field node.

        Implementations decide whether and how to descend into ``node.fields``.

        Args:
            node: The composite node to visit

        Returns:
            Visitor-specific result
        """
        pass
