"""Reference graph - which fragments and types each definition mentions."""

from __future__ import annotations

from dataclasses import dataclass, field

from graphql import (
    DocumentNode,
    FragmentSpreadNode,
    NamedTypeNode,
    Node,
    OperationDefinitionNode,
    VariableDefinitionNode,
    Visitor,
    visit,
)


class ReferenceCollector(Visitor):
    """
    AST visitor that records the names a node refers to.

    Fragment spreads contribute the fragment name. Variable definitions whose
    type is a bare named type contribute the type name, so input types
    defined in the same document take part in the closure like fragments.
    Names are kept in first-seen order without duplicates.
    """

    def __init__(self) -> None:
        super().__init__()
        self.names: list[str] = []
        self.spreads: set[str] = set()
        self._seen: set[str] = set()

    def enter_fragment_spread(self, node: FragmentSpreadNode, *args) -> None:
        """Record a spread target."""
        self.spreads.add(node.name.value)
        self._add(node.name.value)

    def enter_variable_definition(self, node: VariableDefinitionNode, *args) -> None:
        """Record the variable's type when it is not wrapped."""
        if isinstance(node.type, NamedTypeNode):
            self._add(node.type.name.value)

    def _add(self, name: str) -> None:
        if name not in self._seen:
            self._seen.add(name)
            self.names.append(name)


def collect_references(node: Node) -> list[str]:
    """Direct references of a node, in first-seen order."""
    collector = ReferenceCollector()
    visit(node, collector)
    return collector.names


@dataclass
class ReferenceGraph:
    """Direct references of every named definition in a document."""

    operations: dict[str, list[str]] = field(default_factory=dict)
    """Operation name -> names it references directly."""

    definitions: dict[str, list[str]] = field(default_factory=dict)
    """Fragment (or other named definition) name -> names it references directly."""

    spreads: set[str] = field(default_factory=set)
    """Every name that appears as the target of a fragment spread."""

    def operation_references(self, name: str) -> list[str]:
        return self.operations.get(name, [])

    def references(self, name: str) -> list[str]:
        return self.definitions.get(name, [])


def build_reference_graph(document: DocumentNode) -> ReferenceGraph:
    """
    Build the reference graph of a merged document.

    Unnamed definitions are left out; they cannot be referenced. When a name
    is defined twice, the first definition's references are kept, matching
    the way names are resolved when documents are assembled.

    Args:
        document: Merged document

    Returns:
        Reference graph for the document's current definitions
    """
    graph = ReferenceGraph()

    for definition in document.definitions:
        name = getattr(definition, "name", None)
        if name is None:
            continue

        collector = ReferenceCollector()
        visit(definition, collector)
        graph.spreads.update(collector.spreads)

        target = (
            graph.operations
            if isinstance(definition, OperationDefinitionNode)
            else graph.definitions
        )
        target.setdefault(name.value, collector.names)

    return graph
