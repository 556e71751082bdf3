"""Tests for ignorelint.resolver — keyword, mapping and chained resolvers."""

from __future__ import annotations

from pathlib import Path

import pytest

from ignorelint.errors import ConfigError
from ignorelint.resolver.base import NullTypeResolver
from ignorelint.resolver.keywords import KeywordTypeResolver
from ignorelint.resolver.registry import (
    ChainTypeResolver,
    MappingTypeResolver,
    load_known_types,
    parse_known_types,
)


class TestNullTypeResolver:
    def test_always_misses(self) -> None:
        resolver = NullTypeResolver()
        assert resolver.resolve("int") is None
        assert resolver.resolve("Foo") is None


class TestKeywordTypeResolver:
    def test_keywords(self) -> None:
        resolver = KeywordTypeResolver()
        assert resolver.resolve("int") == "int"
        assert resolver.resolve("integer") == "int"
        assert resolver.resolve("STRING") == "string"
        assert resolver.resolve("positive-int") == "int<1, max>"

    def test_not_a_keyword(self) -> None:
        resolver = KeywordTypeResolver()
        assert resolver.resolve("Foo") is None
        assert resolver.resolve("") is None
        assert resolver.resolve("not a type at all") is None

    def test_custom_table(self) -> None:
        resolver = KeywordTypeResolver({"Str": "str"})
        assert resolver.resolve("str") == "str"
        assert resolver.resolve("int") is None


class TestMappingTypeResolver:
    def test_exact_and_case_insensitive(self, foo_bar_resolver: MappingTypeResolver) -> None:
        assert foo_bar_resolver.resolve("Foo") == "class Foo"
        assert foo_bar_resolver.resolve("foo") == "class Foo"
        assert foo_bar_resolver.resolve("qux") is None

    def test_namespaced(self) -> None:
        resolver = MappingTypeResolver({"App\\Model\\User": "class App\\Model\\User"})
        assert resolver.resolve("\\App\\Model\\User") == "class App\\Model\\User"
        assert resolver.resolve("app\\model\\user") == "class App\\Model\\User"

    @pytest.mark.parametrize("name", ["", " ", "Foo Bar", "123", "Foo::bar", "int<0, max>", "\x00"])
    def test_invalid_identifiers(self, foo_bar_resolver: MappingTypeResolver, name: str) -> None:
        assert foo_bar_resolver.resolve(name) is None

    def test_len(self, foo_bar_resolver: MappingTypeResolver) -> None:
        assert len(foo_bar_resolver) == 2


class TestChainTypeResolver:
    def test_first_answer_wins(self) -> None:
        chain = ChainTypeResolver([
            MappingTypeResolver({"int": "custom int"}),
            KeywordTypeResolver(),
        ])
        assert chain.resolve("int") == "custom int"
        assert chain.resolve("string") == "string"
        assert chain.resolve("Nope") is None

    def test_empty_chain(self) -> None:
        assert ChainTypeResolver([]).resolve("int") is None


class TestKnownTypes:
    def test_parse_mapping(self) -> None:
        assert parse_known_types({"Foo": "class Foo", "Bar": None}) == {
            "Foo": "class Foo",
            "Bar": "Bar",
        }

    def test_parse_list(self) -> None:
        assert parse_known_types(["Foo", "Bar"]) == {"Foo": "Foo", "Bar": "Bar"}

    def test_parse_types_key(self) -> None:
        assert parse_known_types({"types": ["Foo"]}) == {"Foo": "Foo"}

    def test_parse_empty(self) -> None:
        assert parse_known_types(None) == {}

    def test_parse_invalid(self) -> None:
        with pytest.raises(ConfigError):
            parse_known_types("Foo")

    def test_load_fixture(self, fixtures_dir: Path) -> None:
        types = load_known_types(fixtures_dir / "known_types.yaml")
        assert types["Foo"] == "class Foo"
        assert types["App\\Model\\User"] == "class App\\Model\\User"
        assert types["Stringable"] == "Stringable"

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_known_types(tmp_path / "missing.yaml")

    def test_load_broken_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("types: [Foo\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_known_types(path)
