"""CLI entry point for the GraphQL fragment loader."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from graphql import GraphQLError
from rich.console import Console

from .collector import SourceCollector
from .config import DanglingReferencePolicy, LoaderConfig, OutputFormat
from .imports import import_path, scan_imports
from .loader import DocumentLoader, LoaderError
from .output import BuildReport, get_exit_code, get_formatter

app = typer.Typer(
    name="graphql-fragment-loader",
    help="Resolve #import directives in GraphQL files and build minimal per-operation documents.",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from . import __version__
        console.print(f"graphql-fragment-loader v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """GraphQL Fragment Loader - merge imported fragments and split documents per operation."""
    pass


@app.command()
def build(
    paths: Annotated[
        list[Path],
        typer.Argument(
            help="GraphQL files or directories to build.",
            exists=True,
        ),
    ],
    output_format: Annotated[
        str,
        typer.Option(
            "--format", "-f",
            help="Output format: 'human', 'json' or 'graphql'.",
        ),
    ] = "human",
    dangling: Annotated[
        str,
        typer.Option(
            "--dangling",
            help="Spreads of undefined fragments: 'ignore' or 'warn'.",
        ),
    ] = "ignore",
    extensions: Annotated[
        Optional[list[str]],
        typer.Option(
            "--ext", "-e",
            help="Filter files by extension (can be used multiple times).",
        ),
    ] = None,
    marker: Annotated[
        str,
        typer.Option(
            "--marker",
            help="Comment marker that introduces import directives.",
        ),
    ] = "#",
) -> None:
    """
    Build the default and per-operation documents of GraphQL files.

    Every file's #import directives are resolved relative to the file, the
    imported fragments are merged in, and each named operation gets a
    document holding just the operation and the fragments it uses.

    Examples:

        graphql-fragment-loader build queries/

        graphql-fragment-loader build queries/user.graphql --format graphql

        graphql-fragment-loader build . --format json --dangling warn
    """
    try:
        fmt = OutputFormat(output_format.lower())
    except ValueError:
        console.print(
            f"[red]Error: Invalid format '{output_format}'. Use 'human', 'json' or 'graphql'.[/red]"
        )
        raise typer.Exit(1)

    try:
        policy = DanglingReferencePolicy(dangling.lower())
    except ValueError:
        console.print(f"[red]Error: Invalid dangling policy '{dangling}'. Use 'ignore' or 'warn'.[/red]")
        raise typer.Exit(1)

    config = LoaderConfig(import_marker=marker, dangling_references=policy)

    if fmt == OutputFormat.HUMAN:
        console.print("[dim]Scanning for GraphQL files...[/dim]")

    collector = SourceCollector(config.extensions)
    files = collector.collect(paths, extensions)

    if not files:
        console.print("[yellow]No GraphQL files found in the specified paths.[/yellow]")
        raise typer.Exit(0)

    if fmt == OutputFormat.HUMAN:
        console.print(f"[dim]Found {len(files)} files[/dim]")

    loader = DocumentLoader(config)
    reports = [_build_file(loader, file_path) for file_path in files]

    formatter = get_formatter(fmt.value)
    formatter.format(reports)

    raise typer.Exit(get_exit_code(reports))


@app.command()
def imports(
    file: Annotated[
        Path,
        typer.Argument(
            help="GraphQL file to inspect.",
            exists=True,
            dir_okay=False,
        ),
    ],
    marker: Annotated[
        str,
        typer.Option(
            "--marker",
            help="Comment marker that introduces import directives.",
        ),
    ] = "#",
) -> None:
    """
    List the import directives at the top of a GraphQL file.

    Examples:

        graphql-fragment-loader imports queries/user.graphql
    """
    config = LoaderConfig(import_marker=marker)
    try:
        source = file.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error reading {file}: {e}[/red]")
        raise typer.Exit(1)

    targets = scan_imports(source, config.import_marker)
    if not targets:
        console.print("[dim]No imports.[/dim]")
        raise typer.Exit(0)

    loader = DocumentLoader(config)
    for target in targets:
        resolved = loader.resolve_target(file.resolve(), target)
        status = "[green]✓[/green]" if resolved.is_file() else "[red]✗ missing[/red]"
        console.print(f"  {import_path(target):40} {status}")


def _build_file(loader: DocumentLoader, file_path: Path) -> BuildReport:
    """Build one file, turning load failures into a report."""
    try:
        return BuildReport(source_file=file_path, result=loader.compile_file(file_path))
    except (GraphQLError, LoaderError, OSError, UnicodeDecodeError) as e:
        return BuildReport(source_file=file_path, error=str(e))


if __name__ == "__main__":
    app()
