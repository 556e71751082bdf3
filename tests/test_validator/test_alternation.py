"""Tests for ignorelint.validator.alternation — the ignored-types check."""

from __future__ import annotations

from ignorelint.regex.parser import parse
from ignorelint.resolver.base import NullTypeResolver, TypeResolver
from ignorelint.resolver.keywords import KeywordTypeResolver
from ignorelint.resolver.registry import MappingTypeResolver
from ignorelint.validator.alternation import (
    branch_literal_text,
    check_ignored_types,
    extract_branches,
)


class ExplodingResolver(TypeResolver):
    def resolve(self, name: str) -> str | None:
        raise RuntimeError("type universe unavailable")


class RecordingResolver(TypeResolver):
    def __init__(self) -> None:
        self.calls: list[str] = []

    def resolve(self, name: str) -> str | None:
        self.calls.append(name)
        return None


class TestBranchLiteralText:
    def test_plain_literal(self) -> None:
        assert branch_literal_text(parse("Foo")) == "Foo"

    def test_single_character(self) -> None:
        assert branch_literal_text(parse("x")) == "x"

    def test_surrounding_whitespace_is_stripped(self) -> None:
        assert branch_literal_text(parse(" int ")) == "int"

    def test_namespace_separator_is_kept(self) -> None:
        assert branch_literal_text(parse(r"App\\User")) == "App\\User"

    def test_escaped_metacharacter_is_rejected(self) -> None:
        assert branch_literal_text(parse(r"int\[\]")) is None

    def test_escaped_punctuation_is_accepted(self) -> None:
        assert branch_literal_text(parse(r"array\<int\>")) == "array<int>"

    def test_metacharacters_make_branch_non_literal(self) -> None:
        assert branch_literal_text(parse("Fo+")) is None
        assert branch_literal_text(parse("F.o")) is None
        assert branch_literal_text(parse("[F]oo")) is None
        assert branch_literal_text(parse("(Foo)")) is None

    def test_shorthand_escape_is_not_literal(self) -> None:
        assert branch_literal_text(parse(r"Foo\d")) is None

    def test_empty_branch(self) -> None:
        assert branch_literal_text(parse("")) is None


class TestExtractBranches:
    def test_no_alternation(self) -> None:
        assert extract_branches(parse("Foo")) == []

    def test_top_level(self) -> None:
        branches = extract_branches(parse(r"Foo|Ba+r|\d"))
        assert [b.literal_text for b in branches] == ["Foo", None, None]

    def test_grouped_alternation_is_ignored(self) -> None:
        assert extract_branches(parse("(a|b)c")) == []
        assert extract_branches(parse("(?:Foo|Bar)")) == []


class TestCheckIgnoredTypes:
    def test_all_branches_resolve(self, foo_bar_resolver: MappingTypeResolver) -> None:
        finding = check_ignored_types(parse("Foo|Bar"), foo_bar_resolver)
        assert finding is not None
        assert finding.types == {"Foo": "class Foo", "Bar": "interface Bar"}

    def test_partial_resolution_still_flags(self, foo_bar_resolver: MappingTypeResolver) -> None:
        finding = check_ignored_types(parse("Foo|qux"), foo_bar_resolver)
        assert finding is not None
        assert finding.types == {"Foo": "class Foo"}

    def test_nothing_resolves(self, foo_bar_resolver: MappingTypeResolver) -> None:
        assert check_ignored_types(parse("baz|qux"), foo_bar_resolver) is None

    def test_escaped_pipe_is_not_checked(self, foo_bar_resolver: MappingTypeResolver) -> None:
        assert check_ignored_types(parse(r"Foo\|Bar"), foo_bar_resolver) is None

    def test_grouped_alternation_is_not_checked(self, foo_bar_resolver: MappingTypeResolver) -> None:
        assert check_ignored_types(parse("(Foo|Bar)"), foo_bar_resolver) is None

    def test_keyword_types_in_message(self) -> None:
        finding = check_ignored_types(
            parse(r"Parameter \$x expects int|string"), KeywordTypeResolver()
        )
        assert finding is not None
        assert finding.types == {"string": "string"}

    def test_null_resolver_never_flags(self) -> None:
        assert check_ignored_types(parse("Foo|Bar"), NullTypeResolver()) is None

    def test_resolver_errors_are_not_found(self) -> None:
        assert check_ignored_types(parse("Foo|Bar"), ExplodingResolver()) is None

    def test_only_literal_branches_are_queried(self) -> None:
        resolver = RecordingResolver()
        check_ignored_types(parse(r"Foo|Ba.r| Baz |\w+"), resolver)
        assert resolver.calls == ["Foo", "Baz"]
