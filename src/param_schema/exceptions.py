"""Exceptions raised while building schema trees from declarations."""

from typing import Any, Optional


class ParamSchemaError(Exception):
    """Base exception for param-schema errors."""

    pass


class MalformedDeclaration(ParamSchemaError):
    """Raised when a declaration cannot be interpreted.

    Attributes:
        statement: The offending statement (or raw value) that failed to parse.
    """

    def __init__(self, message: str, statement: Any = None) -> None:
        self.statement = statement
        if statement is not None:
            message = f"{message}: {statement!r}"
        super().__init__(message)


class NestingDepthExceeded(MalformedDeclaration):
    """Raised when nested blocks go deeper than the configured limit."""

    def __init__(self, max_depth: int, statement: Optional[Any] = None) -> None:
        self.max_depth = max_depth
        super().__init__(f"Declaration nesting exceeds maximum depth of {max_depth}", statement)
