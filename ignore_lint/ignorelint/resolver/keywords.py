r"""Resolver for the host tool's built-in type keywords.

Without a class universe only keyword types can be recognized; this is what
catches patterns such as ``Parameter \$x of type int|string``.
"""

from __future__ import annotations

from ignorelint.resolver.base import TypeResolver

KEYWORD_TYPES: dict[str, str] = {
    "int": "int",
    "integer": "int",
    "float": "float",
    "double": "float",
    "string": "string",
    "bool": "bool",
    "boolean": "bool",
    "true": "true",
    "false": "false",
    "null": "null",
    "void": "void",
    "never": "never",
    "mixed": "mixed",
    "array": "array",
    "list": "list<mixed>",
    "iterable": "iterable",
    "callable": "callable",
    "object": "object",
    "resource": "resource",
    "scalar": "bool|float|int|string",
    "number": "float|int",
    "numeric": "float|int|numeric-string",
    "array-key": "int|string",
    "positive-int": "int<1, max>",
    "negative-int": "int<min, -1>",
    "non-negative-int": "int<0, max>",
    "non-positive-int": "int<min, 0>",
    "non-empty-string": "non-empty-string",
    "numeric-string": "numeric-string",
    "class-string": "class-string",
    "callable-string": "callable-string",
    "non-empty-array": "non-empty-array",
    "non-empty-list": "non-empty-list<mixed>",
}


class KeywordTypeResolver(TypeResolver):
    """Recognize built-in type keywords, case-insensitively."""

    def __init__(self, keywords: dict[str, str] | None = None) -> None:
        self._keywords = {
            k.lower(): v for k, v in (keywords or KEYWORD_TYPES).items()
        }

    def resolve(self, name: str) -> str | None:
        return self._keywords.get(name.strip().lower())
