"""Source collector - finds GraphQL files to compile."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SourceCollector:
    """
    Collects GraphQL source files from files and directories.

    Files are returned in a stable order: paths are taken in the order given,
    and the contents of each directory are sorted by path.
    """

    def __init__(self, extensions: Optional[list[str]] = None) -> None:
        """
        Initialize the collector.

        Args:
            extensions: Extensions treated as GraphQL (default: .graphql, .gql)
        """
        self.extensions = self._normalize(extensions or [".graphql", ".gql"])

    def collect(
        self,
        paths: list[Path],
        extensions: Optional[list[str]] = None,
    ) -> list[Path]:
        """
        Collect all GraphQL files under the given paths.

        Args:
            paths: List of files or directories to scan
            extensions: Optional list of extensions to filter by

        Returns:
            Matching files, without duplicates
        """
        allowed = self._normalize(extensions) if extensions else self.extensions
        found: list[Path] = []
        seen: set[Path] = set()

        for path in paths:
            if path.is_file():
                candidates = [path] if path.suffix.lower() in allowed else []
            elif path.is_dir():
                candidates = self._process_directory(path, allowed)
            else:
                candidates = []

            for candidate in candidates:
                key = candidate.resolve()
                if key not in seen:
                    seen.add(key)
                    found.append(candidate)

        return found

    def _process_directory(self, directory: Path, allowed: list[str]) -> list[Path]:
        """Recursively find matching files in a directory."""
        files: list[Path] = []
        for ext in allowed:
            files.extend(
                file_path
                for file_path in directory.rglob(f"*{ext}")
                if file_path.is_file()
            )
        return sorted(files)

    @staticmethod
    def _normalize(extensions: list[str]) -> list[str]:
        return [
            ext.lower() if ext.startswith(".") else f".{ext}".lower()
            for ext in extensions
        ]

    @property
    def supported_extensions(self) -> list[str]:
        """Get list of supported file extensions."""
        return list(self.extensions)
