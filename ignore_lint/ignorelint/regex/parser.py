"""Parser building a syntax tree from regex tokens.

Grammar:
    Pattern     ::= Alternation
    Alternation ::= Sequence ('|' Sequence)*
    Sequence    ::= Term*
    Term        ::= Atom Quantifier*
    Atom        ::= Literal | '.' | Class | Escape | Anchor | Options
                  | GroupOpen Alternation ')'

Alternation is flattened per nesting level: ``a|b|c`` yields one node with
three branches. An alternation inside a group stays local to that group.
Groups are tracked on a scope stack rather than the call stack, and at most
MAX_GROUP_DEPTH of them may be open at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ignorelint.errors import MalformedPatternError
from ignorelint.regex.nodes import (
    Alternation,
    Anchor,
    AnchorKind,
    AnyChar,
    CharacterClass,
    ClassRange,
    Escape,
    Group,
    InlineOptions,
    Literal,
    Quantifier,
    Sequence,
    SyntaxNode,
)
from ignorelint.regex.tokenizer import (
    EscapeCategory,
    Token,
    TokenKind,
    decode_class_escape,
    tokenize,
)

logger = logging.getLogger(__name__)

_POSIX_CLASS_NAMES = {
    "alnum", "alpha", "ascii", "blank", "cntrl", "digit", "graph",
    "lower", "print", "punct", "space", "upper", "word", "xdigit",
}

# PCRE2 default parenthesis nesting limit
MAX_GROUP_DEPTH = 250


@dataclass
class _Scope:
    """The pattern root or one open group while parsing."""

    opener: Token | None
    start: int
    branches: list[SyntaxNode] = field(default_factory=list)
    items: list[SyntaxNode] = field(default_factory=list)


class RegexParser:
    """Parser over the token stream of a single pattern."""

    def __init__(self, pattern: str, tokens: list[Token] | None = None) -> None:
        self.pattern = pattern
        self._tokens = tokens if tokens is not None else tokenize(pattern)
        self._index = 0

    def parse(self) -> SyntaxNode:
        """Parse the whole pattern; leftover tokens are an error."""
        self._index = 0
        node = self._parse_alternation()

        token = self._peek()
        if token is not None:
            # only an unmatched ')' can stop the outermost alternation
            raise self._error(token.start, "unmatched closing parenthesis")
        return node

    # -- token stream --------------------------------------------------------

    def _peek(self) -> Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _accept(self, kind: TokenKind) -> Token | None:
        token = self._peek()
        if token is not None and token.kind == kind:
            self._index += 1
            return token
        return None

    def _position(self) -> int:
        """Offset of the next token, or the end of the pattern."""
        token = self._peek()
        return token.start if token is not None else len(self.pattern)

    def _error(self, offset: int, reason: str) -> MalformedPatternError:
        return MalformedPatternError(offset, reason, self.pattern)

    # -- productions ---------------------------------------------------------

    def _parse_alternation(self) -> SyntaxNode:
        """Parse up to an unmatched ``)`` or the end of the pattern.

        Open groups are kept on an explicit stack of scopes; opening more
        than MAX_GROUP_DEPTH nested groups is an error.
        """
        scopes = [_Scope(opener=None, start=self._position())]
        while True:
            scope = scopes[-1]
            token = self._peek()

            if token is None or (token.kind == TokenKind.GROUP_CLOSE and scope.opener is None):
                if scope.opener is not None:
                    raise self._error(scope.opener.start, "unterminated group")
                return self._close_alternation(scope)

            if token.kind == TokenKind.ALTERNATION:
                self._advance()
                scope.branches.append(self._close_sequence(scope))
                scope.start = self._position()
            elif token.kind == TokenKind.GROUP_OPEN:
                self._advance()
                if len(scopes) > MAX_GROUP_DEPTH:
                    raise self._error(token.start, "parentheses are too deeply nested")
                scopes.append(_Scope(opener=token, start=self._position()))
            elif token.kind == TokenKind.GROUP_CLOSE:
                closer = self._advance()
                scopes.pop()
                group = Group(
                    start=scope.opener.start,
                    end=closer.end,
                    kind=scope.opener.group_kind,
                    body=self._close_alternation(scope),
                    name=scope.opener.name,
                )
                scopes[-1].items.append(self._parse_quantifier(group))
            else:
                scope.items.append(self._parse_quantifier(self._parse_atom()))

    def _close_sequence(self, scope: _Scope) -> SyntaxNode:
        items, scope.items = scope.items, []
        if len(items) == 1:
            return items[0]
        end = items[-1].end if items else scope.start
        return Sequence(start=scope.start, end=end, items=tuple(items))

    def _close_alternation(self, scope: _Scope) -> SyntaxNode:
        branches = scope.branches + [self._close_sequence(scope)]
        if len(branches) == 1:
            return branches[0]
        return Alternation(
            start=branches[0].start,
            end=branches[-1].end,
            branches=tuple(branches),
        )

    def _parse_quantifier(self, node: SyntaxNode) -> SyntaxNode:
        """Wrap *node* in a Quantifier if one follows it."""
        token = self._peek()
        if token is None or token.kind != TokenKind.QUANTIFIER:
            return node
        if isinstance(node, InlineOptions):
            raise self._error(token.start, "quantifier does not follow a repeatable item")
        self._advance()

        follow = self._peek()
        if follow is not None and follow.kind == TokenKind.QUANTIFIER:
            raise self._error(follow.start, "quantifier does not follow a repeatable item")

        return Quantifier(
            start=node.start,
            end=token.end,
            child=node,
            min=token.min,
            max=token.max,
            lazy=token.lazy,
            possessive=token.possessive,
        )

    def _parse_atom(self) -> SyntaxNode:
        token = self._advance()
        kind = token.kind

        if kind == TokenKind.LITERAL:
            return Literal(token.start, token.end, token.value)
        if kind == TokenKind.DOT:
            return AnyChar(token.start, token.end)
        if kind == TokenKind.ESCAPE:
            return Escape(token.start, token.end, token.escape, token.value, token.text)
        if kind == TokenKind.ANCHOR_START:
            return Anchor(token.start, token.end, AnchorKind.START)
        if kind == TokenKind.ANCHOR_END:
            return Anchor(token.start, token.end, AnchorKind.END)
        if kind == TokenKind.OPTIONS:
            return InlineOptions(token.start, token.end, token.text)
        if kind == TokenKind.CLASS:
            return self._parse_class(token)
        if kind == TokenKind.QUANTIFIER:
            raise self._error(token.start, "quantifier does not follow a repeatable item")

        raise self._error(token.start, f"unexpected token '{token.text}'")

    def _parse_class(self, token: Token) -> CharacterClass:
        body = token.value
        offset = token.end - 1 - len(body)
        members: list[tuple[str, bool, bool, int]] = []

        i = 0
        while i < len(body):
            at = offset + i
            if body[i] == "\\":
                end, category, value = decode_class_escape(self.pattern, at)
                single = category in (
                    EscapeCategory.identity,
                    EscapeCategory.control,
                    EscapeCategory.codepoint,
                ) or (category == EscapeCategory.assertion and value == "b")
                if category == EscapeCategory.assertion and value == "b":
                    # \b inside a class is a backspace
                    value = "\b"
                if category == EscapeCategory.quoted:
                    members.extend((ch, True, True, at) for ch in value)
                else:
                    members.append((value if single else self.pattern[at:end], single, True, at))
                i = end - offset
                continue
            if body.startswith("[:", i):
                close = body.find(":]", i)
                if close != -1:
                    name = body[i + 2:close].lstrip("^")
                    if name not in _POSIX_CLASS_NAMES:
                        raise self._error(at, f"unknown POSIX class name '{name}'")
                    members.append((body[i:close + 2], False, False, at))
                    i = close + 2
                    continue
            members.append((body[i], True, False, at))
            i += 1

        return CharacterClass(
            start=token.start,
            end=token.end,
            negated=token.negated,
            items=self._class_ranges(members),
        )

    def _class_ranges(self, members: list[tuple[str, bool, bool, int]]) -> tuple[ClassRange, ...]:
        """Fold ``x``, ``-``, ``y`` member triples into ranges."""
        ranges: list[ClassRange] = []
        i = 0
        while i < len(members):
            text, single, _, at = members[i]
            is_range = (
                i + 2 < len(members)
                and members[i + 1][0] == "-"
                and not members[i + 1][2]
                and single
                and members[i + 2][1]
            )
            if is_range:
                high = members[i + 2][0]
                if ord(text) > ord(high):
                    raise self._error(at, "range out of order in character class")
                ranges.append(ClassRange(text, high))
                i += 3
                continue
            ranges.append(ClassRange(text, text))
            i += 1
        return tuple(ranges)


def parse(pattern: str) -> SyntaxNode:
    """Tokenize and parse *pattern* into a syntax tree.

    Raises MalformedPatternError when the pattern is outside the grammar.
    """
    tree = RegexParser(pattern).parse()
    logger.debug("Parsed pattern %r into %s", pattern, type(tree).__name__)
    return tree
