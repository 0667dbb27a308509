"""Tests for the definition merger."""

from graphql import FragmentDefinitionNode, OperationDefinitionNode, parse

from graphql_fragment_loader.merger import FragmentRegistry, merge_definitions


def _names(document):
    return [definition.name.value for definition in document.definitions if definition.name]


def _fragment(document, name):
    matches = [
        definition
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode) and definition.name.value == name
    ]
    assert len(matches) == 1
    return matches[0]


class TestFragmentRegistry:
    """Tests for FragmentRegistry."""

    def test_register(self):
        registry = FragmentRegistry()

        assert registry.register("Foo") is True
        assert registry.register("Foo") is False
        assert "Foo" in registry
        assert "Bar" not in registry
        assert len(registry) == 1


class TestMergeDefinitions:
    """Tests for merge_definitions."""

    def test_appends_imported_fragments(self):
        """Imported fragments follow the host's definitions."""
        host = parse("query Q { ...Shared }")
        imported = parse("fragment Shared on T { a }")

        merged = merge_definitions(host, [imported])

        assert merged is not host
        assert isinstance(merged.definitions, tuple)
        assert merged.loc is host.loc
        assert _names(merged) == ["Q", "Shared"]

    def test_first_import_wins(self):
        """Two imports defining the same fragment keep the first one."""
        host = parse("query Q { ...Dup }")
        first = parse("fragment Dup on T { fromFirst }")
        second = parse("fragment Dup on T { fromSecond }")

        merged = merge_definitions(host, [first, second])

        dup = _fragment(merged, "Dup")
        assert dup.selection_set.selections[0].name.value == "fromFirst"
        assert dup is first.definitions[0]

    def test_host_fragment_wins(self):
        """A host fragment is never duplicated by an import."""
        host = parse("query Q { ...Foo }\nfragment Foo on T { local }")
        imported = parse("fragment Foo on T { imported }")

        merged = merge_definitions(host, [imported])

        foo = _fragment(merged, "Foo")
        assert foo.selection_set.selections[0].name.value == "local"

    def test_operations_not_imported(self):
        """Only fragments are taken from imported documents."""
        host = parse("query Q { a }")
        imported = parse("query Other { b }\nfragment F on T { c }")

        merged = merge_definitions(host, [imported])

        assert _names(merged) == ["Q", "F"]
        assert sum(isinstance(d, OperationDefinitionNode) for d in merged.definitions) == 1

    def test_host_definitions_kept(self):
        """Host definitions lead the result, and the host itself is unchanged."""
        host = parse("fragment A on T { a }\nquery Q { ...A }")
        before = tuple(host.definitions)

        merged = merge_definitions(host, [parse("fragment B on T { b }")])

        assert tuple(merged.definitions[:2]) == before
        assert tuple(host.definitions) == before
        assert _names(merged) == ["A", "Q", "B"]

    def test_same_import_twice(self):
        """Importing the same document twice adds its fragments once."""
        host = parse("query Q { ...F }")
        imported = parse("fragment F on T { a }")

        merged = merge_definitions(host, [imported, imported])

        assert _names(merged) == ["Q", "F"]

    def test_registry_is_per_merge(self):
        """Separate merges do not share registered names."""
        imported = parse("fragment F on T { a }")

        first = merge_definitions(parse("query A { ...F }"), [imported])
        second = merge_definitions(parse("query B { ...F }"), [imported])

        assert _names(first) == ["A", "F"]
        assert _names(second) == ["B", "F"]

    def test_explicit_registry(self):
        """Names already in a supplied registry are dropped."""
        registry = FragmentRegistry()
        registry.register("F")

        merged = merge_definitions(
            parse("query Q { a }"), [parse("fragment F on T { a }")], registry
        )

        assert _names(merged) == ["Q"]
