"""Declaration models and reader interface for param-schema.

A declaration is the generic tagged-tree form of a block of ``requires`` and
``optional`` calls, as produced by an upstream syntax reader. This module
defines that closed set of input shapes and the abstract reader interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from param_schema.schema_tree.nodes import FieldNode


class Keyword(str, Enum):
    """Recognized statement keywords."""

    REQUIRES = "requires"
    OPTIONAL = "optional"


class TrailingShape(str, Enum):
    """The three accepted forms of a statement's arguments.

    NESTED_BLOCK: ``[name, type, NestedBlock]`` (composite field)
    OPTIONS: ``[name, type, {option: value, ...}]`` (leaf with options)
    BARE: ``[name, type]`` (leaf without options)
    """

    NESTED_BLOCK = "nested_block"
    OPTIONS = "options"
    BARE = "bare"


class Statement(BaseModel):
    """A single tagged call describing one field.

    The keyword is kept as raw text; whether it is one of the recognized
    keywords is decided by the builder so that it can name the statement.

    Attributes:
        keyword: The statement tag, e.g. 'requires' or 'optional'.
        args: The call arguments: field name, type tag and an optional trailing value.
    """

    model_config = ConfigDict(frozen=True)

    keyword: str = Field(..., description="The statement tag")
    args: List[Any] = Field(default_factory=list, description="The call arguments")

    def trailing_shape(self) -> Optional[TrailingShape]:
        """Classify the statement arguments.

        Returns:
            The matching TrailingShape, or None if the arguments match no form.
        """
        if len(self.args) == 2:
            return TrailingShape.BARE
        if len(self.args) == 3:
            trailing = self.args[2]
            if isinstance(trailing, NestedBlock):
                return TrailingShape.NESTED_BLOCK
            if isinstance(trailing, Mapping):
                return TrailingShape.OPTIONS
        return None


class Block(BaseModel):
    """An explicit grouping of statements (the implicit block wrapper)."""

    model_config = ConfigDict(frozen=True)

    statements: List[Union[Statement, "Block"]] = Field(
        default_factory=list, description="Statements in declaration order"
    )


class NestedBlock(BaseModel):
    """Marks the nested body of a composite field declaration.

    Attributes:
        body: The nested declaration: a single statement, a block, or a sequence.
    """

    model_config = ConfigDict(frozen=True)

    body: Union[Statement, Block, List[Union[Statement, Block]]] = Field(
        ..., description="The nested declaration"
    )

    def __repr__(self) -> str:
        # Shallow so error messages stay bounded for deeply nested declarations
        size = len(self.body) if isinstance(self.body, list) else 1
        return f"NestedBlock(<{size} item{'s' if size != 1 else ''}>)"


Block.model_rebuild()

Declaration = Union[Statement, Block, Sequence[Union[Statement, Block]]]


class DeclarationReader(ABC):
    """Abstract base class for upstream syntax readers.

    Implementations turn some concrete source (JSON text, a config file, ...)
    into the tagged-tree declaration consumed by the schema tree builder.
    """

    @abstractmethod
    def read_declaration(self, source: Any) -> Declaration:
        """Read a declaration from a source.

        Args:
            source: The reader-specific source.

        Returns:
            The declaration as Statement/Block values.

        Raises:
            MalformedDeclaration: If the source does not describe a declaration.
        """
        raise NotImplementedError("Subclasses must implement read_declaration")

    def read_schema_tree(self, source: Any, max_depth: Optional[int] = None) -> List["FieldNode"]:
        """Read a declaration and build its schema tree.

        Args:
            source: The reader-specific source.
            max_depth: Optional nesting depth limit for the builder.

        Returns:
            The top-level field nodes in declaration order.
        """
        from param_schema.schema_tree.builder import SchemaTreeBuilder

        declaration = self.read_declaration(source)
        return SchemaTreeBuilder(max_depth=max_depth).parse(declaration)
