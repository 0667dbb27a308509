"""Tests for loading GraphQL files from disk."""

import pytest
from graphql import GraphQLSyntaxError

from graphql_fragment_loader.compiler import ArtifactSet, NamingViolation
from graphql_fragment_loader.config import LoaderConfig
from graphql_fragment_loader.loader import (
    DocumentLoader,
    ImportCycleError,
    UnresolvedImportError,
)


def _names(document):
    return [definition.name.value for definition in document.definitions]


@pytest.fixture
def write(tmp_path):
    """Write a GraphQL file under tmp_path and return its path."""

    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestDocumentLoader:
    """Tests for DocumentLoader."""

    def test_file_without_imports(self, write):
        path = write("q.graphql", "query Q { a }")

        document = DocumentLoader().load(path)

        assert _names(document) == ["Q"]

    def test_imported_fragment(self, write):
        """An #import pulls the imported file's fragments in."""
        write("b.graphql", "fragment Shared on T { a }")
        path = write("a.graphql", '#import "./b.graphql"\nquery Q { ...Shared }\n')

        result = DocumentLoader().compile_file(path)

        assert isinstance(result, ArtifactSet)
        assert result.source_file == path
        assert _names(result.default) == ["Q", "Shared"]
        assert _names(result.operations["Q"]) == ["Q", "Shared"]

    def test_transitive_imports(self, write):
        """Fragments imported by an imported file are available too."""
        write("fragments/leaf.graphql", "fragment Leaf on T { a }")
        write(
            "fragments/mid.graphql",
            '#import "./leaf.graphql"\nfragment Mid on T { ...Leaf }',
        )
        path = write("query.graphql", '#import "./fragments/mid.graphql"\nquery Q { ...Mid }')

        result = DocumentLoader().compile_file(path)

        assert _names(result.default) == ["Q", "Mid", "Leaf"]
        assert _names(result.operations["Q"]) == ["Q", "Mid", "Leaf"]

    def test_first_import_wins(self, write):
        write("one.graphql", "fragment Dup on T { one }")
        write("two.graphql", "fragment Dup on T { two }")
        path = write(
            "q.graphql",
            '#import "./one.graphql"\n#import "./two.graphql"\nquery Q { ...Dup }',
        )

        document = DocumentLoader().load(path)

        assert _names(document) == ["Q", "Dup"]
        assert document.definitions[1].selection_set.selections[0].name.value == "one"

    def test_shared_import_in_diamond(self, write):
        """A file reached through two imports contributes its fragments once."""
        write("common.graphql", "fragment Common on T { a }")
        write("left.graphql", '#import "./common.graphql"\nfragment Left on T { ...Common }')
        write("right.graphql", '#import "./common.graphql"\nfragment Right on T { ...Common }')
        path = write(
            "q.graphql",
            '#import "./left.graphql"\n#import "./right.graphql"\nquery Q { ...Left ...Right }',
        )

        result = DocumentLoader().compile_file(path)

        assert _names(result.default) == ["Q", "Left", "Common", "Right"]
        assert _names(result.operations["Q"]) == ["Q", "Left", "Right", "Common"]

    def test_imported_operations_ignored(self, write):
        write("other.graphql", "query Other { b }\nfragment F on T { c }")
        path = write("q.graphql", '#import "./other.graphql"\nquery Q { ...F }')

        result = DocumentLoader().compile_file(path)

        assert list(result.operations) == ["Q"]

    def test_imported_anonymous_operations_not_validated(self, write):
        """Naming rules apply to the compiled file, not to its imports."""
        write("other.graphql", "query { a }\nmutation { b }\nfragment F on T { c }")
        path = write("q.graphql", '#import "./other.graphql"\nquery Q { ...F }')

        result = DocumentLoader().compile_file(path)

        assert isinstance(result, ArtifactSet)
        assert _names(result.operations["Q"]) == ["Q", "F"]

    def test_custom_import_marker(self, write):
        """Directives with a non-comment marker are resolved and not parsed."""
        write("b.graphql", "fragment Shared on T { a }")
        path = write("a.graphql", '//import "./b.graphql"\nquery Q { ...Shared }\n')

        result = DocumentLoader(LoaderConfig(import_marker="//")).compile_file(path)

        assert isinstance(result, ArtifactSet)
        assert _names(result.operations["Q"]) == ["Q", "Shared"]

    def test_missing_import(self, write):
        path = write("q.graphql", '#import "./nowhere.graphql"\nquery Q { a }')

        with pytest.raises(UnresolvedImportError) as excinfo:
            DocumentLoader().load(path)

        assert excinfo.value.target == '"./nowhere.graphql"'

    def test_import_cycle(self, write):
        write("a.graphql", '#import "./b.graphql"\nfragment A on T { a }')
        write("b.graphql", '#import "./a.graphql"\nfragment B on T { b }')
        path = write("q.graphql", '#import "./a.graphql"\nquery Q { ...A }')

        with pytest.raises(ImportCycleError) as excinfo:
            DocumentLoader().load(path)

        assert [p.name for p in excinfo.value.chain] == ["a.graphql", "b.graphql", "a.graphql"]

    def test_loader_reusable_after_error(self, write):
        """A failed load leaves no state behind."""
        bad = write("bad.graphql", '#import "./bad.graphql"\nquery Q { a }')
        good = write("good.graphql", "query Q { a }")
        loader = DocumentLoader()

        with pytest.raises(ImportCycleError):
            loader.load(bad)

        assert _names(loader.load(good)) == ["Q"]

    def test_parse_error(self, write):
        path = write("q.graphql", "query Q {")

        with pytest.raises(GraphQLSyntaxError):
            DocumentLoader().load(path)

    def test_naming_violation(self, write):
        path = write("q.graphql", "query { a }\nmutation { b }")

        result = DocumentLoader().compile_file(path)

        assert isinstance(result, NamingViolation)
        assert result.source_file == path
