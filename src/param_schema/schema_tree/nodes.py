"""Schema tree node definitions.

A schema tree is an ordered forest of FieldNode values. Leaf nodes describe
scalar fields; composite nodes carry the child fields of a nested sub-schema.
Nodes are immutable: options are exposed through a read-only mapping and
children are stored as a tuple.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from param_schema.declaration.base import Block, NestedBlock, Statement

if TYPE_CHECKING:
    from param_schema.schema_tree.visitor import SchemaTreeVisitor

REQUIRED_OPTION = "required"


class FieldNode(BaseModel):
    """A single field of a schema tree.

    Attributes:
        id: The field name, unique among its siblings
        type: The type tag, stored and forwarded without interpretation
        options: Read-only field options in declaration order, always including
            a boolean 'required'
        fields: Child nodes of a composite field, empty for leaf fields
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="The field name")
    type: str = Field(..., description="The opaque type tag")
    options: Mapping[str, Any] = Field(default_factory=dict, description="Field options")
    fields: Tuple["FieldNode", ...] = Field(default_factory=tuple, description="Child field nodes")

    @field_validator("options", mode="after")
    @classmethod
    def _freeze_options(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _check_options(self) -> "FieldNode":
        if not isinstance(self.options.get(REQUIRED_OPTION), bool):
            raise ValueError(f"Field '{self.id}' must have a boolean '{REQUIRED_OPTION}' option")
        for key, value in self.options.items():
            if isinstance(value, (NestedBlock, Block, Statement)):
                raise ValueError(f"Option '{key}' of field '{self.id}' holds a nested declaration")
        return self

    @field_serializer("options")
    def _serialize_options(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(value)

    @property
    def required(self) -> bool:
        """Whether the field was declared with the required keyword."""
        return self.options[REQUIRED_OPTION]

    @property
    def is_composite(self) -> bool:
        """Whether this node describes a nested sub-schema."""
        return bool(self.fields)

    def accept(self, visitor: "SchemaTreeVisitor") -> Any:
        """Accept a visitor for the visitor pattern.

        Args:
            visitor: The visitor to accept

        Returns:
            Result of the visitor's visit operation
        """
        if self.is_composite:
            return visitor.visit_composite(self)
        return visitor.visit_leaf(self)


FieldNode.model_rebuild()
