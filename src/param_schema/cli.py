"""Command-line interface for param-schema.

This module provides a CLI for building schema trees from JSON declaration
files and displaying or checking them.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typing_extensions import Annotated

from param_schema.config import MAX_NESTING_DEPTH_LIMIT, Config
from param_schema.declaration.json_reader import JsonDeclarationReader
from param_schema.exceptions import ParamSchemaError
from param_schema.render.serialize import dump_schema_tree
from param_schema.render.text import format_fields_as_text
from param_schema.render.tree import render_rich_tree
from param_schema.schema_tree.builder import SchemaTreeBuilder
from param_schema.schema_tree.nodes import FieldNode

app = typer.Typer(
    name="param-schema",
    help="Build normalized field schema trees from requires/optional declarations",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("tree", "text", "json")


def get_config(max_depth: Optional[int] = None) -> Config:
    """Get configuration from environment or CLI options.

    Args:
        max_depth: Override the nesting depth limit from the environment

    Returns:
        Config instance
    """
    config = Config()

    if max_depth is not None:
        config.max_nesting_depth = max_depth

    return config


def setup_logging(level: str) -> None:
    """Route log records through rich at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def build_tree(path: Path, config: Config) -> List[FieldNode]:
    """Read a JSON declaration file and build its schema tree."""
    reader = JsonDeclarationReader()
    declaration = reader.read_file(path)
    return SchemaTreeBuilder(max_depth=config.max_nesting_depth).parse(declaration)


def count_fields(nodes: Sequence[FieldNode]) -> int:
    """Count every node in a forest, including nested ones."""
    return sum(1 + count_fields(node.fields) for node in nodes)


@app.command()
def show(
    path: Annotated[Path, typer.Argument(help="JSON declaration file")],
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: tree, text or json")
    ] = "tree",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path (stdout if not specified)"),
    ] = None,
    max_depth: Annotated[
        Optional[int],
        typer.Option(
            "--max-depth", help="Maximum nesting depth", min=1, max=MAX_NESTING_DEPTH_LIMIT
        ),
    ] = None,
) -> None:
    """Build and display the schema tree of a declaration file.

    Example:
        param-schema show params.json

        param-schema show params.json --format json --output tree.json
    """
    if output_format not in OUTPUT_FORMATS:
        err_console.print(
            f"[red]Error:[/red] Unknown format '{output_format}'. "
            f"Expected one of: {', '.join(OUTPUT_FORMATS)}",
            soft_wrap=True,
        )
        raise typer.Exit(1)

    try:
        config = get_config(max_depth)
        setup_logging(config.log_level)

        nodes = build_tree(path, config)

        if output_format == "json":
            text_output = dump_schema_tree(nodes)
        elif output_format == "text" or output:
            # File output of the tree format falls back to the text listing
            text_output = format_fields_as_text(nodes, title=f"Schema: {path.name}")
        else:
            console.print(render_rich_tree(nodes, title=f"[bold]Schema: {path.name}[/bold]"))
            return

        if output:
            output.write_text(text_output)
            console.print(f"[green]✓[/green] Schema written to {output}", soft_wrap=True)
        else:
            console.print(
                text_output, markup=False, highlight=False, emoji=False, soft_wrap=True
            )

    except (ParamSchemaError, ValidationError, OSError) as e:
        logger.debug("Failed to build schema tree from %s", path, exc_info=True)
        err_console.print(
            f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True
        )
        raise typer.Exit(1)


@app.command()
def check(
    path: Annotated[Path, typer.Argument(help="JSON declaration file")],
    max_depth: Annotated[
        Optional[int],
        typer.Option(
            "--max-depth", help="Maximum nesting depth", min=1, max=MAX_NESTING_DEPTH_LIMIT
        ),
    ] = None,
) -> None:
    """Check that a declaration file builds into a schema tree.

    Exits with status 1 if the declaration is malformed.

    Example:
        param-schema check params.json --max-depth 8
    """
    try:
        config = get_config(max_depth)
        setup_logging(config.log_level)

        nodes = build_tree(path, config)
    except (ParamSchemaError, ValidationError, OSError) as e:
        logger.debug("Failed to build schema tree from %s", path, exc_info=True)
        err_console.print(
            f"[red]✗[/red] {path}: {escape(str(e))}", highlight=False, soft_wrap=True
        )
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/green] {path}: {len(nodes)} top-level fields, {count_fields(nodes)} total",
        soft_wrap=True,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
