"""param-schema - Build normalized field schema trees from declarations."""

from param_schema.config import Config, load_config
from param_schema.declaration import (
    Block,
    JsonDeclarationReader,
    NestedBlock,
    Statement,
    block,
    optional,
    requires,
)
from param_schema.exceptions import MalformedDeclaration, NestingDepthExceeded, ParamSchemaError
from param_schema.schema_tree import (
    FieldNode,
    SchemaTreeBuilder,
    SchemaTreeVisitor,
    parse_declaration,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "Block",
    "NestedBlock",
    "Statement",
    "block",
    "optional",
    "requires",
    "JsonDeclarationReader",
    "MalformedDeclaration",
    "NestingDepthExceeded",
    "ParamSchemaError",
    "FieldNode",
    "SchemaTreeBuilder",
    "SchemaTreeVisitor",
    "parse_declaration",
]
