"""Constructors for writing declarations directly in Python.

Example:
    >>> declaration = block(
    ...     requires("query", "string"),
    ...     optional("limit", "integer", {"default": 10}),
    ...     requires(
    ...         "profile",
    ...         "map",
    ...         do=[requires("access_key", "string"), requires("secret_key", "string")],
    ...     ),
    ... )
"""

from typing import Any, Mapping, Optional, Sequence, Union

from param_schema.declaration.base import Block, Keyword, NestedBlock, Statement
from param_schema.exceptions import MalformedDeclaration

Body = Union[Statement, Block, Sequence[Union[Statement, Block]]]


def _statement(
    keyword: Keyword,
    name: str,
    type_tag: str,
    options: Optional[Mapping[str, Any]],
    do: Optional[Body],
) -> Statement:
    args: list = [name, type_tag]
    if do is not None and options is not None:
        raise MalformedDeclaration(
            "A field takes either options or a nested block, not both",
            Statement(keyword=keyword.value, args=[name, type_tag, options, do]),
        )
    if do is not None:
        body = list(do) if isinstance(do, (list, tuple)) else do
        args.append(NestedBlock(body=body))
    elif options is not None:
        args.append(dict(options))
    return Statement(keyword=keyword.value, args=args)


def requires(
    name: str,
    type_tag: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    do: Optional[Body] = None,
) -> Statement:
    """Declare a required field.

    Args:
        name: The field name.
        type_tag: The opaque type tag.
        options: Leaf options such as defaults or constraints.
        do: Nested declaration for a composite field.

    Returns:
        The statement for the field.
    """
    return _statement(Keyword.REQUIRES, name, type_tag, options, do)


def optional(
    name: str,
    type_tag: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    do: Optional[Body] = None,
) -> Statement:
    """Declare an optional field. Arguments are the same as for requires()."""
    return _statement(Keyword.OPTIONAL, name, type_tag, options, do)


def block(*statements: Union[Statement, Block]) -> Block:
    """Group statements into an explicit block."""
    return Block(statements=list(statements))
