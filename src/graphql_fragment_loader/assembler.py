"""Minimal document assembly - an operation plus the fragments it needs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from graphql import DefinitionNode, DocumentNode, OperationDefinitionNode

from .config import DanglingReferencePolicy
from .issues import Issue, IssueSeverity, IssueType
from .references import ReferenceGraph, build_reference_graph


class DocumentAssembler:
    """
    Builds minimal documents out of a merged document.

    For a named operation the minimal document holds the operation followed
    by every definition it reaches through references, each exactly once, in
    breadth-first discovery order. References that resolve to nothing are
    skipped; with ``DanglingReferencePolicy.WARN`` each skipped fragment
    spread is also recorded in ``issues``.
    """

    def __init__(
        self,
        document: DocumentNode,
        graph: Optional[ReferenceGraph] = None,
        policy: DanglingReferencePolicy = DanglingReferencePolicy.IGNORE,
        source_file: Optional[Path] = None,
    ) -> None:
        """
        Initialize the assembler.

        Args:
            document: Merged document to slice
            graph: Reference graph of ``document`` (built if omitted)
            policy: How to report unresolved fragment spreads
            source_file: File the document came from, for issue reporting
        """
        self.document = document
        self.graph = graph if graph is not None else build_reference_graph(document)
        self.policy = policy
        self.source_file = source_file
        self.issues: list[Issue] = []

        self._operations: dict[str, OperationDefinitionNode] = {}
        self._definitions: dict[str, DefinitionNode] = {}
        for definition in document.definitions:
            name = getattr(definition, "name", None)
            if name is None:
                continue
            if isinstance(definition, OperationDefinitionNode):
                self._operations.setdefault(name.value, definition)
            else:
                self._definitions.setdefault(name.value, definition)

    def find_operation(self, name: str) -> OperationDefinitionNode:
        """Look up an operation by name, raising KeyError if absent."""
        try:
            return self._operations[name]
        except KeyError:
            raise KeyError(f"Unknown operation: {name}") from None

    def closure(self, operation_name: str) -> list[str]:
        """
        Names transitively referenced by an operation, in discovery order.

        Args:
            operation_name: Name of the operation to start from

        Returns:
            Each reachable name once, level by level
        """
        visited: set[str] = set()
        order: list[str] = []
        frontier = list(self.graph.operation_references(operation_name))

        while frontier:
            next_frontier: list[str] = []
            queued: set[str] = set()
            for name in frontier:
                if name in visited:
                    continue
                visited.add(name)
                order.append(name)
                for child in self.graph.references(name):
                    if child not in visited and child not in queued:
                        queued.add(child)
                        next_frontier.append(child)
            frontier = next_frontier

        return order

    def assemble(self, operation_name: str) -> DocumentNode:
        """
        Create the minimal document for a named operation.

        The result is a new document of the same node class as the merged
        one; definition nodes and source location are shared, not copied.

        Args:
            operation_name: Name of the operation to export

        Returns:
            Document with the operation followed by its reference closure
        """
        operation = self.find_operation(operation_name)
        definitions: list[DefinitionNode] = [operation]

        for name in self.closure(operation_name):
            definition = self._definitions.get(name)
            if definition is not None:
                definitions.append(definition)
            elif name in self.graph.spreads:
                self._report_dangling(operation, name)

        return type(self.document)(
            definitions=tuple(definitions),
            loc=getattr(self.document, "loc", None),
        )

    def _report_dangling(self, operation: OperationDefinitionNode, name: str) -> None:
        if self.policy != DanglingReferencePolicy.WARN:
            return

        operation_name = operation.name.value if operation.name else None
        self.issues.append(
            Issue.at_node(
                operation,
                type=IssueType.DANGLING_REFERENCE,
                severity=IssueSeverity.WARNING,
                message=f"Fragment {name} is referenced by {operation_name} but not defined",
                source_file=self.source_file,
                operation=operation_name,
            )
        )
