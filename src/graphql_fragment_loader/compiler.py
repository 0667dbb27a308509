"""Compiler - turns a GraphQL source into its default and per-operation documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from graphql import DocumentNode, OperationDefinitionNode

from .assembler import DocumentAssembler
from .config import LoaderConfig
from .imports import parse_source, scan_imports
from .issues import Issue, IssueSeverity, IssueType
from .merger import FragmentRegistry, merge_definitions
from .references import build_reference_graph

UNNAMED_OPERATION_MESSAGE = (
    "Query/mutation names are required for a document with multiple definitions"
)

ImportResolver = Callable[[str], DocumentNode]
"""Maps a literal import target to the already merged document it names."""


@dataclass
class ArtifactSet:
    """Documents produced for one source file."""

    default: DocumentNode
    """The merged document."""

    operations: dict[str, DocumentNode] = field(default_factory=dict)
    """Operation name -> minimal document, in source order."""

    source_file: Optional[Path] = None
    issues: list[Issue] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warning-level issues."""
        return any(issue.severity == IssueSeverity.WARNING for issue in self.issues)


@dataclass
class NamingViolation:
    """Fatal naming error; no artifacts are produced for the file."""

    message: str
    source_file: Optional[Path] = None
    line: int = 0
    column: int = 0

    def to_issue(self) -> Issue:
        return Issue(
            type=IssueType.NAMING_VIOLATION,
            severity=IssueSeverity.ERROR,
            message=self.message,
            source_file=self.source_file,
            line=self.line,
            column=self.column,
        )


CompileResult = Union[ArtifactSet, NamingViolation]


class DocumentCompiler:
    """
    Validates operation naming and produces the artifact set of a document.

    Performs:
    1. Naming validation of the merged document
    2. Reference graph construction
    3. Minimal document assembly for every named operation
    """

    def __init__(self, config: Optional[LoaderConfig] = None) -> None:
        self.config = config or LoaderConfig()

    def compile(
        self, document: DocumentNode, source_file: Optional[Path] = None
    ) -> CompileResult:
        """
        Compile a merged document.

        Args:
            document: Document with imports already merged in
            source_file: File the document came from, for reporting

        Returns:
            ArtifactSet on success, NamingViolation if operations are not
            uniquely named
        """
        operations = [
            definition
            for definition in document.definitions
            if isinstance(definition, OperationDefinitionNode)
        ]

        violation = self._check_naming(operations, source_file)
        if violation is not None:
            return violation

        result = ArtifactSet(default=document, source_file=source_file)
        named = [operation for operation in operations if operation.name is not None]
        if not named:
            return result

        assembler = DocumentAssembler(
            document,
            build_reference_graph(document),
            policy=self.config.dangling_references,
            source_file=source_file,
        )
        for operation in named:
            name = operation.name.value
            result.operations[name] = assembler.assemble(name)

        result.issues.extend(assembler.issues)
        return result

    def compile_source(
        self,
        source: str,
        resolve: ImportResolver,
        source_file: Optional[Path] = None,
    ) -> CompileResult:
        """
        Run the whole pipeline on raw source text.

        Each import target is resolved once, in the order it is declared,
        before anything is merged. Resolver and parse errors propagate.

        Args:
            source: GraphQL source text
            resolve: Host callback returning the document for an import target
            source_file: File the source came from, for reporting

        Returns:
            Compile result for the source
        """
        marker = self.config.import_marker
        document = parse_source(source, marker)
        imported = [resolve(target) for target in scan_imports(source, marker)]
        merged = merge_definitions(document, imported, FragmentRegistry())
        return self.compile(merged, source_file)

    def _check_naming(
        self,
        operations: list[OperationDefinitionNode],
        source_file: Optional[Path],
    ) -> Optional[NamingViolation]:
        if len(operations) > 1:
            for operation in operations:
                if operation.name is None:
                    return self._violation(UNNAMED_OPERATION_MESSAGE, operation, source_file)

        seen: set[str] = set()
        for operation in operations:
            if operation.name is None:
                continue
            name = operation.name.value
            if name in seen:
                return self._violation(f"Duplicate operation name: {name}", operation, source_file)
            seen.add(name)

        return None

    def _violation(
        self,
        message: str,
        node: OperationDefinitionNode,
        source_file: Optional[Path],
    ) -> NamingViolation:
        issue = Issue.at_node(
            node,
            type=IssueType.NAMING_VIOLATION,
            severity=IssueSeverity.ERROR,
            message=message,
        )
        return NamingViolation(
            message=message,
            source_file=source_file,
            line=issue.line,
            column=issue.column,
        )
