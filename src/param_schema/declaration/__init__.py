"""Declaration input models, DSL constructors and readers."""

from param_schema.declaration.base import (
    Block,
    Declaration,
    DeclarationReader,
    Keyword,
    NestedBlock,
    Statement,
    TrailingShape,
)
from param_schema.declaration.dsl import block, optional, requires
from param_schema.declaration.json_reader import JsonDeclarationReader

__all__ = [
    "Block",
    "Declaration",
    "DeclarationReader",
    "Keyword",
    "NestedBlock",
    "Statement",
    "TrailingShape",
    "block",
    "optional",
    "requires",
    "JsonDeclarationReader",
]
