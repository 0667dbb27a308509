"""Definition merger - pulls imported fragments into a host document."""

from __future__ import annotations

from typing import Iterable, Optional

from graphql import DocumentNode, FragmentDefinitionNode


class FragmentRegistry:
    """
    Names of the fragments already merged into a document.

    A registry belongs to a single top-level merge; create a new one for
    every file being resolved.
    """

    def __init__(self) -> None:
        self._names: set[str] = set()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def register(self, name: str) -> bool:
        """
        Record a fragment name.

        Returns:
            True if the name was new, False if it was already registered
        """
        if name in self._names:
            return False
        self._names.add(name)
        return True


def unique_fragments(
    document: DocumentNode, registry: FragmentRegistry
) -> list[FragmentDefinitionNode]:
    """Fragments of ``document`` whose names are not yet in ``registry``."""
    fragments: list[FragmentDefinitionNode] = []
    for definition in document.definitions:
        if isinstance(definition, FragmentDefinitionNode) and registry.register(
            definition.name.value
        ):
            fragments.append(definition)
    return fragments


def merge_definitions(
    document: DocumentNode,
    imported: Iterable[DocumentNode],
    registry: Optional[FragmentRegistry] = None,
) -> DocumentNode:
    """
    Build a document from a host document plus the fragments it imports.

    Imported documents must be given in import order. Only fragment
    definitions are taken from them; the first fragment seen under a name
    wins and later ones are dropped. The host's own fragments are registered
    first, so no two fragments in the result ever share a name.

    Args:
        document: Host document, left unchanged
        imported: Already loaded documents, one per import target
        registry: Name registry for this merge (a fresh one by default)

    Returns:
        New document: the host's definitions followed by the imported fragments
    """
    if registry is None:
        registry = FragmentRegistry()

    for definition in document.definitions:
        if isinstance(definition, FragmentDefinitionNode):
            registry.register(definition.name.value)

    merged = list(document.definitions)
    for imported_document in imported:
        merged.extend(unique_fragments(imported_document, registry))

    return type(document)(definitions=tuple(merged), loc=document.loc)
