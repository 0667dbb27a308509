"""Document loader - reads GraphQL files from disk and resolves their imports."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from graphql import DocumentNode

from .compiler import CompileResult, DocumentCompiler
from .config import LoaderConfig
from .imports import import_path, parse_source, scan_imports
from .merger import FragmentRegistry, merge_definitions


class LoaderError(Exception):
    """Base class for errors raised while resolving imports."""


class UnresolvedImportError(LoaderError):
    """An import target does not name a readable file."""

    def __init__(self, target: str, importer: Path) -> None:
        self.target = target
        self.importer = importer
        super().__init__(f"Cannot resolve import {target} from {importer}")


class ImportCycleError(LoaderError):
    """A file imports itself, directly or through other files."""

    def __init__(self, chain: list[Path]) -> None:
        self.chain = chain
        super().__init__("Import cycle: " + " -> ".join(str(path) for path in chain))


class DocumentLoader:
    """
    Loads GraphQL files and merges the fragments they import.

    Import targets are resolved relative to the directory of the importing
    file. Each file gets its own fragment registry, so deduplication never
    leaks from one file to another.
    """

    def __init__(self, config: Optional[LoaderConfig] = None) -> None:
        """Initialize with a configuration (defaults if omitted)."""
        self.config = config or LoaderConfig()
        self.compiler = DocumentCompiler(self.config)
        self._stack: list[Path] = []

    def read(self, path: Path) -> str:
        """Read a source file."""
        return path.read_text(encoding=self.config.encoding)

    def load(self, path: Path) -> DocumentNode:
        """
        Load a file and merge in the fragments of everything it imports.

        Only fragments are taken from imported files, so their operations are
        not naming-validated here; a file with several anonymous operations
        fails only when it is compiled itself.

        Args:
            path: GraphQL file to load

        Returns:
            Merged document for the file

        Raises:
            UnresolvedImportError: An import names a missing file
            ImportCycleError: The file is already being loaded further up
            GraphQLSyntaxError: A file fails to parse
        """
        path = path.resolve()
        if path in self._stack:
            raise ImportCycleError(self._stack[self._stack.index(path):] + [path])

        self._stack.append(path)
        try:
            source = self.read(path)
            marker = self.config.import_marker
            document = parse_source(source, marker)
            imported = [
                self._load_import(path, target)
                for target in scan_imports(source, marker)
            ]
            return merge_definitions(document, imported, FragmentRegistry())
        finally:
            self._stack.pop()

    def compile_file(self, path: Path) -> CompileResult:
        """
        Load a file and compile it into its artifact set.

        Args:
            path: GraphQL file to compile

        Returns:
            ArtifactSet or NamingViolation for the file
        """
        return self.compiler.compile(self.load(path), source_file=path)

    def resolve_target(self, importer: Path, target: str) -> Path:
        """Path an import target refers to, relative to the importing file."""
        return (importer.parent / import_path(target)).resolve()

    def _load_import(self, importer: Path, target: str) -> DocumentNode:
        path = self.resolve_target(importer, target)
        if not path.is_file():
            raise UnresolvedImportError(target, importer)
        return self.load(path)
