"""Builder for converting declarations into schema tree nodes.

The builder is a pure transform: it performs no I/O and keeps no state between
calls, so a single instance can be shared freely.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from param_schema.config import DEFAULT_MAX_NESTING_DEPTH, MAX_NESTING_DEPTH_LIMIT
from param_schema.declaration.base import (
    Block,
    Declaration,
    Keyword,
    NestedBlock,
    Statement,
    TrailingShape,
)
from param_schema.exceptions import MalformedDeclaration, NestingDepthExceeded
from param_schema.schema_tree.nodes import REQUIRED_OPTION, FieldNode

logger = logging.getLogger(__name__)


class SchemaTreeBuilder:
    """Builds schema tree nodes from declarations.

    Attributes:
        max_depth: The deepest level of nested blocks accepted. Top-level
            statements are at depth 1.
    """

    def __init__(self, max_depth: Optional[int] = None) -> None:
        self.max_depth = DEFAULT_MAX_NESTING_DEPTH if max_depth is None else max_depth
        if not 1 <= self.max_depth <= MAX_NESTING_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_NESTING_DEPTH_LIMIT}, got {self.max_depth}"
            )

    def parse(self, declaration: Declaration) -> List[FieldNode]:
        """Convert a declaration into an ordered list of field nodes.

        Args:
            declaration: A Block, a single Statement, or a sequence of them

        Returns:
            The top-level field nodes in declaration order

        Raises:
            MalformedDeclaration: If any statement cannot be interpreted
        """
        nodes = self._parse_declaration(declaration, depth=1)
        logger.debug("Built schema tree with %d top-level fields", len(nodes))
        return nodes

    def parse_statement(self, statement: Statement) -> FieldNode:
        """Convert a single statement into a field node.

        Args:
            statement: The statement to convert

        Returns:
            The field node described by the statement

        Raises:
            MalformedDeclaration: If the statement cannot be interpreted
        """
        return self._parse_statement(statement, depth=1)

    def _parse_declaration(self, declaration: Any, depth: int) -> List[FieldNode]:
        nodes = []
        seen = set()
        for statement in self._flatten(declaration):
            node = self._parse_statement(statement, depth)
            if node.id in seen:
                raise MalformedDeclaration(f"Duplicate field '{node.id}'", statement)
            seen.add(node.id)
            nodes.append(node)
        return nodes

    def _flatten(self, declaration: Any) -> Iterator[Statement]:
        """Yield the statements of a declaration, unwrapping blocks in place."""
        if isinstance(declaration, Statement):
            yield declaration
        elif isinstance(declaration, Block):
            for item in declaration.statements:
                yield from self._flatten(item)
        elif isinstance(declaration, (list, tuple)):
            for item in declaration:
                if not isinstance(item, (Statement, Block)):
                    raise MalformedDeclaration("Expected a statement or block", item)
                yield from self._flatten(item)
        else:
            raise MalformedDeclaration("Expected a statement, block or sequence", declaration)

    def _parse_statement(self, statement: Any, depth: int) -> FieldNode:
        if not isinstance(statement, Statement):
            raise MalformedDeclaration("Expected a statement", statement)

        if depth > self.max_depth:
            raise NestingDepthExceeded(self.max_depth, statement)

        try:
            keyword = Keyword(statement.keyword)
        except ValueError:
            raise MalformedDeclaration(
                f"Unrecognized keyword '{statement.keyword}'", statement
            ) from None

        shape = statement.trailing_shape()
        if shape is None:
            raise MalformedDeclaration("Arguments match no field form", statement)

        name, type_tag = statement.args[0], statement.args[1]
        if not isinstance(name, str) or not name:
            raise MalformedDeclaration("Field name must be a non-empty string", statement)
        if not isinstance(type_tag, str) or not type_tag:
            raise MalformedDeclaration("Type tag must be a non-empty string", statement)

        required = keyword is Keyword.REQUIRES

        if shape is TrailingShape.NESTED_BLOCK:
            fields = self._parse_declaration(statement.args[2].body, depth + 1)
            if not fields:
                raise MalformedDeclaration("Nested block declares no fields", statement)
            node = FieldNode(
                id=name,
                type=type_tag,
                options={REQUIRED_OPTION: required},
                fields=fields,
            )
        elif shape is TrailingShape.OPTIONS:
            options = self._merge_options(statement.args[2], required, statement)
            node = FieldNode(id=name, type=type_tag, options=options)
        else:
            node = FieldNode(id=name, type=type_tag, options={REQUIRED_OPTION: required})

        logger.debug(
            "Built %s field '%s' of type '%s' at depth %d",
            "composite" if node.is_composite else "leaf",
            node.id,
            node.type,
            depth,
        )
        return node

    @staticmethod
    def _merge_options(
        options: Mapping[Any, Any], required: bool, statement: Statement
    ) -> Dict[str, Any]:
        """Copy user options and set 'required' from the keyword.

        The keyword always wins over a 'required' key supplied in the options.
        """
        merged = {}
        for key, value in options.items():
            if not isinstance(key, str):
                raise MalformedDeclaration(f"Option names must be strings, got {key!r}", statement)
            if isinstance(value, (NestedBlock, Block, Statement)):
                raise MalformedDeclaration(
                    f"Option '{key}' holds a nested declaration", statement
                )
            if key == REQUIRED_OPTION:
                if value != required:
                    logger.debug(
                        "Overriding 'required: %r' option of field '%s' with keyword value %r",
                        value,
                        statement.args[0],
                        required,
                    )
                continue
            merged[key] = value
        merged[REQUIRED_OPTION] = required
        return merged


def parse_declaration(declaration: Declaration, max_depth: Optional[int] = None) -> List[FieldNode]:
    """Convenience function to build a schema tree from a declaration.

    Args:
        declaration: A Block, a single Statement, or a sequence of them
        max_depth: Optional nesting depth limit

    Returns:
        The top-level field nodes in declaration order
    """
    return SchemaTreeBuilder(max_depth=max_depth).parse(declaration)
