"""JSON declaration reader.

Reads the tagged-tree form of a declaration from JSON. A statement is a
single-key object mapping the keyword to its argument list::

    {"requires": ["query", "string"]}
    {"optional": ["limit", "integer", {"default": 10}]}
    {"requires": ["profile", "map", {"do": [
        {"requires": ["access_key", "string"]},
        {"requires": ["secret_key", "string"]}
    ]}]}

A trailing object whose only key is ``do`` is a nested block; any other object
is the options mapping; an object mixing ``do`` with other keys is rejected.
A top-level list is a sequence of statements and ``{"block": [...]}`` is an
explicit block.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from param_schema.config import MAX_NESTING_DEPTH_LIMIT
from param_schema.declaration.base import (
    Block,
    Declaration,
    DeclarationReader,
    NestedBlock,
    Statement,
)
from param_schema.exceptions import MalformedDeclaration, NestingDepthExceeded

logger = logging.getLogger(__name__)

BLOCK_KEY = "block"
NESTED_BLOCK_KEY = "do"


class JsonDeclarationReader(DeclarationReader):
    """Reads declarations from JSON text or files."""

    def read_declaration(self, source: str) -> Declaration:
        """Parse JSON text into a declaration.

        Args:
            source: JSON text.

        Returns:
            A Statement, a Block, or a list of them.

        Raises:
            MalformedDeclaration: If the text is not valid JSON or not a declaration.
        """
        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            raise MalformedDeclaration(f"Invalid JSON declaration ({e})") from e
        except RecursionError as e:
            raise NestingDepthExceeded(MAX_NESTING_DEPTH_LIMIT) from e

        declaration = self._parse_declaration(data, depth=1)
        logger.debug("Read JSON declaration: %s", type(declaration).__name__)
        return declaration

    def read_file(self, path: Union[str, Path]) -> Declaration:
        """Read a declaration from a JSON file.

        Args:
            path: Path to the JSON file.

        Returns:
            The declaration contained in the file.

        Raises:
            MalformedDeclaration: If the file is not UTF-8 text or not a declaration.
        """
        logger.debug("Reading declaration file %s", path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDeclaration(f"Declaration file {path} is not valid UTF-8 ({e})") from e
        return self.read_declaration(text)

    def _parse_declaration(self, data: Any, depth: int) -> Declaration:
        if isinstance(data, list):
            return [self._parse_item(item, depth) for item in data]
        return self._parse_item(data, depth)

    def _parse_item(self, data: Any, depth: int) -> Union[Statement, Block]:
        """Convert one JSON object into a Statement or Block."""
        if depth > MAX_NESTING_DEPTH_LIMIT:
            raise NestingDepthExceeded(MAX_NESTING_DEPTH_LIMIT)

        if not isinstance(data, dict) or len(data) != 1:
            raise MalformedDeclaration("Expected a single-key statement object", data)

        ((key, value),) = data.items()

        if key == BLOCK_KEY:
            if not isinstance(value, list):
                raise MalformedDeclaration("Block contents must be a list", data)
            return Block(statements=[self._parse_item(item, depth) for item in value])

        if not isinstance(value, list):
            raise MalformedDeclaration("Statement arguments must be a list", data)

        args = list(value)
        if len(args) == 3 and isinstance(args[2], dict) and NESTED_BLOCK_KEY in args[2]:
            if len(args[2]) != 1:
                raise MalformedDeclaration(
                    f"A '{NESTED_BLOCK_KEY}' block cannot be combined with options", data
                )
            args[2] = NestedBlock(
                body=self._parse_declaration(args[2][NESTED_BLOCK_KEY], depth + 1)
            )

        return Statement(keyword=key, args=args)
