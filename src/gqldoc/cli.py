"""Command-line interface for gqldoc."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Any, TextIO

import typer
from graphql import GraphQLSchema

from .config import RenderConfig, discover_config
from .document import format_markdown
from .exceptions import GqldocError
from .logger import setup_logger
from .parser import convert_schema, parse_files
from .printer import format_graphql

FORMATS = ("gfm", "graphql")

app = typer.Typer(
    name="gqldoc",
    help="Generate documentation for GraphQL schemas",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: gqldoc.yaml next to the schema)",
        ),
    ] = None,
) -> None:
    """Global options for gqldoc commands."""
    setup_logger(verbose)
    ctx.obj = {"config_path": config}


@app.command()
def doc(  # noqa: PLR0913 - CLI command needs multiple options
    ctx: typer.Context,
    files: Annotated[list[Path], typer.Argument(help="GraphQL schema files (.gql or .graphql)")],
    *,
    format: Annotated[  # noqa: A002 - 'format' is appropriate name for CLI option
        str,
        typer.Option("--format", "-f", help="Output format: gfm (Markdown) or graphql"),
    ] = "gfm",
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
    title: Annotated[
        str | None, typer.Option("--title", help="Document title (overrides config)")
    ] = None,
    minify: Annotated[
        bool | None,
        typer.Option(
            "--minify/--no-minify", help="Compact embedded HTML tables (overrides config)"
        ),
    ] = None,
) -> None:
    """Generate documentation or reformat the schema."""
    if format not in FORMATS:
        typer.echo(
            f"Error: Invalid format '{format}'. Must be 'gfm' or 'graphql'.",
            err=True,
        )
        raise typer.Exit(1)

    config_path: Path | None = (ctx.obj or {}).get("config_path")

    try:
        graphql_schema = parse_files(files)
        render_config = None
        if format == "gfm":
            render_config = _load_render_config(files, config_path, title=title, minify=minify)

        if output:
            with output.open("w", encoding="utf-8") as dst:
                _write(dst, format, graphql_schema, render_config)
            typer.echo(f"Documentation written to {output}", err=True)
        else:
            _write(sys.stdout, format, graphql_schema, render_config)
    except (GqldocError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


def _load_render_config(
    files: list[Path], config_path: Path | None, *, title: str | None, minify: bool | None
) -> RenderConfig:
    """Load config from file, then apply command-line overrides."""
    config = discover_config(files, config_path)
    updates: dict[str, Any] = {}
    if title is not None:
        updates["title"] = title
    if minify is not None:
        updates["minify"] = minify
    return config.model_copy(update=updates) if updates else config


def _write(
    dst: TextIO, output_format: str, schema: GraphQLSchema, config: RenderConfig | None
) -> None:
    if output_format == "graphql":
        format_graphql(dst, schema)
    else:
        format_markdown(dst, convert_schema(schema), config)


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
