"""Import scanner - reads the #import header block of a GraphQL source."""

from __future__ import annotations

from typing import Iterator, Optional

from graphql import DocumentNode, parse

IMPORT_KEYWORD = "import"
COMMENT_MARKER = "#"

_QUOTES = ('"', "'")


def _header(lines: list[str], marker: str) -> Iterator[tuple[int, Optional[str]]]:
    """Yield (line index, target) for each directive line of the header block."""
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue

        if not stripped.startswith(marker):
            return

        tokens = stripped[len(marker):].split()
        if not tokens or tokens[0] != IMPORT_KEYWORD:
            return

        yield index, tokens[1] if len(tokens) > 1 else None


def scan_imports(source: str, marker: str = COMMENT_MARKER) -> list[str]:
    """
    Extract the import targets declared at the top of a source file.

    Only the leading block is scanned: blank lines are skipped, and the first
    non-blank line that is not an import directive ends the header. Targets
    are returned literally (quotes included) and in file order, duplicates
    kept.

    Args:
        source: Raw GraphQL source text
        marker: Comment marker introducing a directive

    Returns:
        Ordered list of import targets
    """
    return [
        target
        for _, target in _header(source.splitlines(), marker)
        if target is not None
    ]


def strip_imports(source: str, marker: str = COMMENT_MARKER) -> str:
    """
    Blank out the header's directive lines so the text parses as GraphQL.

    Line breaks are kept, so parser locations still match the file.
    """
    lines = source.splitlines(keepends=True)
    for index, _ in list(_header(lines, marker)):
        line = lines[index]
        lines[index] = line[len(line.rstrip("\r\n")):]
    return "".join(lines)


def parse_source(source: str, marker: str = COMMENT_MARKER) -> DocumentNode:
    """
    Parse a GraphQL source that may start with import directives.

    ``#`` directives are GraphQL comments and parse as they are; any other
    marker is blanked out first.
    """
    if marker.startswith(COMMENT_MARKER):
        return parse(source)
    return parse(strip_imports(source, marker))


def import_path(target: str) -> str:
    """Strip one pair of matching quotes from a literal import target."""
    if len(target) >= 2 and target[0] in _QUOTES and target[-1] == target[0]:
        return target[1:-1]
    return target
