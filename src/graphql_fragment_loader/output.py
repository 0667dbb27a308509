"""Output formatters - human-readable, JSON and GraphQL output."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from graphql import DocumentNode, print_ast
from graphql.utilities import ast_to_dict
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .compiler import ArtifactSet, CompileResult, NamingViolation
from .issues import Issue, IssueSeverity

DEFAULT_ARTIFACT = "default"


@dataclass
class BuildReport:
    """Outcome of building one source file."""

    source_file: Path
    result: Optional[CompileResult] = None
    error: Optional[str] = None
    """Message of a load failure (parse error, missing or cyclic import)."""

    @property
    def artifacts(self) -> Optional[ArtifactSet]:
        return self.result if isinstance(self.result, ArtifactSet) else None

    @property
    def failed(self) -> bool:
        return self.error is not None or isinstance(self.result, NamingViolation)

    @property
    def issues(self) -> list[Issue]:
        if isinstance(self.result, NamingViolation):
            return [self.result.to_issue()]
        if isinstance(self.result, ArtifactSet):
            return self.result.issues
        return []

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        data: dict = {"file": str(self.source_file)}
        if self.error is not None:
            data["error"] = self.error
        elif isinstance(self.result, NamingViolation):
            data["error"] = self.result.message
        artifacts = self.artifacts
        if artifacts is not None:
            data["default"] = ast_to_dict(artifacts.default)
            data["operations"] = {
                name: ast_to_dict(document)
                for name, document in artifacts.operations.items()
            }
        data["issues"] = [issue.to_dict() for issue in self.issues]
        return data


def definition_names(document: DocumentNode) -> list[str]:
    """Names of a document's definitions, '<anonymous>' for unnamed ones."""
    names = []
    for definition in document.definitions:
        name = getattr(definition, "name", None)
        names.append(name.value if name is not None else "<anonymous>")
    return names


class OutputFormatter:
    """Base class for output formatters."""

    def format(self, reports: list[BuildReport], output: Optional[TextIO] = None) -> None:
        """Format and write build reports."""
        raise NotImplementedError


class HumanFormatter(OutputFormatter):
    """Human-readable colored terminal output using Rich."""

    SEVERITY_STYLES = {
        IssueSeverity.ERROR: ("red", "✗"),
        IssueSeverity.WARNING: ("yellow", "⚠"),
        IssueSeverity.INFO: ("blue", "•"),
    }

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize formatter."""
        self.console = console or Console()

    def format(self, reports: list[BuildReport], output: Optional[TextIO] = None) -> None:
        """Format and print build reports."""
        self._print_header(reports)
        self._print_artifacts(reports)
        self._print_problems(reports)
        self._print_footer(reports)

    def _print_header(self, reports: list[BuildReport]) -> None:
        title = Text("GraphQL Fragment Loader", style="bold blue")
        subtitle = Text(f"Built {len(reports)} file(s)", style="dim")
        self.console.print()
        self.console.print(Panel(subtitle, title=title, border_style="blue"))
        self.console.print()

    def _print_artifacts(self, reports: list[BuildReport]) -> None:
        table = Table(title="Artifacts", show_header=True, header_style="bold")
        table.add_column("File", style="cyan")
        table.add_column("Artifact")
        table.add_column("Definitions", style="dim")

        for report in reports:
            artifacts = report.artifacts
            if artifacts is None:
                table.add_row(str(report.source_file), Text("failed", style="red"), "")
                continue

            table.add_row(
                str(report.source_file),
                DEFAULT_ARTIFACT,
                ", ".join(definition_names(artifacts.default)),
            )
            for name, document in artifacts.operations.items():
                table.add_row("", name, ", ".join(definition_names(document)))

        self.console.print(table)
        self.console.print()

    def _print_problems(self, reports: list[BuildReport]) -> None:
        for report in reports:
            if report.error is None and not report.issues:
                continue

            self.console.print(f"[bold cyan]{report.source_file}[/bold cyan]")
            if report.error is not None:
                self.console.print(f"  [red]✗ {report.error}[/red]")

            for issue in report.issues:
                style, icon = self.SEVERITY_STYLES.get(issue.severity, ("white", "•"))
                self.console.print(f"[dim]  {issue.line}:{issue.column}[/dim]", end=" ")
                self.console.print(f"[{style}]{icon} {issue.message}[/{style}]")

            self.console.print()

    def _print_footer(self, reports: list[BuildReport]) -> None:
        exit_code = get_exit_code(reports)
        if exit_code == 1:
            self.console.print("[red bold]✗ Some files could not be built[/red bold]")
        elif exit_code == 2:
            self.console.print("[yellow bold]⚠ Built with warnings[/yellow bold]")
        else:
            self.console.print("[green bold]✓ All files built[/green bold]")


class JSONFormatter(OutputFormatter):
    """JSON output: the AST of every artifact, for tooling."""

    def __init__(self, pretty: bool = True) -> None:
        """Initialize formatter."""
        self.pretty = pretty

    def format(self, reports: list[BuildReport], output: Optional[TextIO] = None) -> None:
        """Format and write build reports as JSON."""
        output = output or sys.stdout
        data = {"files": [report.to_dict() for report in reports]}

        if self.pretty:
            json_str = json.dumps(data, indent=2, default=str)
        else:
            json_str = json.dumps(data, default=str)

        output.write(json_str)
        output.write("\n")


class GraphQLFormatter(OutputFormatter):
    """Prints every artifact back as GraphQL source."""

    def format(self, reports: list[BuildReport], output: Optional[TextIO] = None) -> None:
        """Write each artifact as a commented GraphQL block."""
        output = output or sys.stdout
        for report in reports:
            artifacts = report.artifacts
            if artifacts is None:
                message = report.error or (report.issues[0].message if report.issues else "")
                output.write(f"# {report.source_file}: error: {message}\n\n")
                continue

            output.write(f"# {report.source_file} ({DEFAULT_ARTIFACT})\n")
            output.write(print_ast(artifacts.default))
            output.write("\n\n")
            for name, document in artifacts.operations.items():
                output.write(f"# {report.source_file} ({name})\n")
                output.write(print_ast(document))
                output.write("\n\n")


def get_formatter(format_name: str) -> OutputFormatter:
    """Get a formatter by name."""
    formatters = {
        "human": HumanFormatter,
        "json": JSONFormatter,
        "graphql": GraphQLFormatter,
    }

    formatter_class = formatters.get(format_name.lower())
    if not formatter_class:
        raise ValueError(f"Unknown format: {format_name}")

    return formatter_class()


def get_exit_code(reports: list[BuildReport]) -> int:
    """
    Determine the exit code based on build results.

    Returns:
        0: Every file built cleanly
        1: At least one file failed
        2: Warnings only
    """
    if any(report.failed for report in reports):
        return 1
    if any(
        issue.severity == IssueSeverity.WARNING
        for report in reports
        for issue in report.issues
    ):
        return 2
    return 0
