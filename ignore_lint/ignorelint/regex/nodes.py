"""Syntax tree node types produced by the regex parser.

Every node carries the ``start``/``end`` span of the source text it was
parsed from. Nodes are frozen; a tree is never mutated after parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ignorelint.regex.tokenizer import EscapeCategory, GroupKind


class AnchorKind(str, Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Literal:
    start: int
    end: int
    char: str


@dataclass(frozen=True)
class AnyChar:
    """The ``.`` metacharacter."""

    start: int
    end: int


@dataclass(frozen=True)
class ClassRange:
    """One member of a character class; ``low == high`` for single members.

    Shorthands and POSIX classes are kept as their source text.
    """

    low: str
    high: str


@dataclass(frozen=True)
class CharacterClass:
    start: int
    end: int
    negated: bool
    items: tuple[ClassRange, ...]


@dataclass(frozen=True)
class Escape:
    start: int
    end: int
    category: EscapeCategory
    value: str
    text: str

    @property
    def literal_text(self) -> str | None:
        """The text this escape matches literally, if it is a literal escape."""
        return self.value if self.category.is_literal else None


@dataclass(frozen=True)
class Anchor:
    start: int
    end: int
    kind: AnchorKind


@dataclass(frozen=True)
class InlineOptions:
    """Opaque ``(?i)``, ``(?#comment)`` or ``(*VERB)`` construct."""

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class Group:
    start: int
    end: int
    kind: GroupKind
    body: SyntaxNode
    name: str | None = None

    @property
    def is_plain(self) -> bool:
        """Whether the group only groups (no lookaround or conditional)."""
        return self.kind in (
            GroupKind.capturing,
            GroupKind.non_capturing,
            GroupKind.named,
            GroupKind.atomic,
        )


@dataclass(frozen=True)
class Quantifier:
    start: int
    end: int
    child: SyntaxNode
    min: int
    max: int | None
    lazy: bool = False
    possessive: bool = False

    @property
    def is_unbounded(self) -> bool:
        return self.max is None


@dataclass(frozen=True)
class Sequence:
    """Concatenation of items; an empty sequence matches the empty string."""

    start: int
    end: int
    items: tuple[SyntaxNode, ...]


@dataclass(frozen=True)
class Alternation:
    start: int
    end: int
    branches: tuple[SyntaxNode, ...]


SyntaxNode = Union[
    Literal,
    AnyChar,
    CharacterClass,
    Escape,
    Anchor,
    InlineOptions,
    Group,
    Quantifier,
    Sequence,
    Alternation,
]


def children(node: SyntaxNode) -> tuple[SyntaxNode, ...]:
    """Return the direct children of *node* in source order."""
    if isinstance(node, Sequence):
        return node.items
    if isinstance(node, Alternation):
        return node.branches
    if isinstance(node, Group):
        return (node.body,)
    if isinstance(node, Quantifier):
        return (node.child,)
    return ()


def iter_nodes(node: SyntaxNode):
    """Yield *node* and all of its descendants, depth first, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


def source_text(node: SyntaxNode, pattern: str) -> str:
    """Return the slice of *pattern* a node was parsed from."""
    return pattern[node.start:node.end]
