"""Regex sub-grammar and tokenizer for ignore-error patterns.

Recognizes the structural subset of PCRE that pattern validation needs:
literals, escapes, character classes, groups (including the opaque
non-capturing and lookaround prefixes), alternation, anchors and quantifiers.
Nothing here executes a pattern.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ignorelint.errors import MalformedPatternError

MAX_QUANTIFIER_BOUND = 65535
MAX_CODEPOINT = 0x10FFFF


class TokenKind(str, Enum):
    LITERAL = "literal"
    ESCAPE = "escape"
    DOT = "dot"
    CLASS = "class"
    GROUP_OPEN = "group_open"
    GROUP_CLOSE = "group_close"
    ALTERNATION = "alternation"
    ANCHOR_START = "anchor_start"
    ANCHOR_END = "anchor_end"
    QUANTIFIER = "quantifier"
    OPTIONS = "options"


class EscapeCategory(str, Enum):
    """What a backslash sequence stands for."""

    identity = "identity"  # escaped metacharacter or punctuation: \| \$ \.
    control = "control"  # \n \t \r \f \e \a \cX
    codepoint = "codepoint"  # \x41 \x{263A} \0 \012 \o{17}
    shorthand = "shorthand"  # \d \w \s ... character-set shorthands
    unicode_property = "property"  # \p{Lu} \PL
    assertion = "assertion"  # \A \z \Z \b \B \G \K
    reference = "reference"  # \1 \g{-1} \k<name> (?P=name) (?R)
    quoted = "quoted"  # \Q...\E

    @property
    def is_literal(self) -> bool:
        return self in (
            EscapeCategory.identity,
            EscapeCategory.control,
            EscapeCategory.codepoint,
            EscapeCategory.quoted,
        )


class GroupKind(str, Enum):
    capturing = "capturing"
    non_capturing = "non_capturing"
    named = "named"
    lookahead = "lookahead"
    negative_lookahead = "negative_lookahead"
    lookbehind = "lookbehind"
    negative_lookbehind = "negative_lookbehind"
    atomic = "atomic"
    branch_reset = "branch_reset"
    scoped_options = "scoped_options"
    conditional = "conditional"


@dataclass(frozen=True)
class Token:
    """A classified lexeme with its span in the pattern."""

    kind: TokenKind
    text: str
    start: int
    end: int
    value: str = ""
    escape: EscapeCategory | None = None
    negated: bool = False
    min: int = 0
    max: int | None = None
    lazy: bool = False
    possessive: bool = False
    group_kind: GroupKind | None = None
    name: str | None = None


_CONTROL_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "e": "\x1b",
    "a": "\x07",
}
_SHORTHAND_ESCAPES = frozenset("dDwWsShHvVRNX")
_ASSERTION_ESCAPES = frozenset("AzZbBGK")

_BOUND_RE = re.compile(r"\{(\d+)(?:(,)(\d*))?\}")
_GROUP_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_INLINE_FLAGS_RE = re.compile(r"\^?[a-zA-Z]*(?:-[a-zA-Z]*)?")
_RECURSION_RE = re.compile(r"\(\?(?:R|[+-]?\d+|&[A-Za-z_][A-Za-z0-9_]*|P>[A-Za-z_][A-Za-z0-9_]*)\)")
_NAMED_BACKREF_RE = re.compile(r"\(\?P=([A-Za-z_][A-Za-z0-9_]*)\)")
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_POSIX_CLASS_RE = re.compile(r"\[:\^?[a-z]+:\]")

_SINGLE_CHAR_KINDS = {
    "|": TokenKind.ALTERNATION,
    ")": TokenKind.GROUP_CLOSE,
    "^": TokenKind.ANCHOR_START,
    "$": TokenKind.ANCHOR_END,
    ".": TokenKind.DOT,
}


class _Lexer:
    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._pos = 0
        self._tokens: list[Token] = []

    def run(self) -> list[Token]:
        pattern = self._pattern
        while self._pos < len(pattern):
            ch = pattern[self._pos]
            if ch == "\\":
                self._tokens.append(self._read_escape())
            elif ch == "[":
                self._tokens.append(self._read_class())
            elif ch == "(":
                self._tokens.append(self._read_group_open())
            elif ch in "*+?":
                self._tokens.append(self._read_simple_quantifier())
            elif ch == "{":
                self._tokens.append(self._read_brace())
            elif ch in _SINGLE_CHAR_KINDS:
                self._tokens.append(
                    Token(_SINGLE_CHAR_KINDS[ch], ch, self._pos, self._pos + 1)
                )
                self._pos += 1
            else:
                self._tokens.append(self._literal(ch))
        return self._tokens

    # -- helpers -----------------------------------------------------------

    def _error(self, offset: int, reason: str) -> MalformedPatternError:
        return MalformedPatternError(offset, reason, self._pattern)

    def _literal(self, ch: str) -> Token:
        token = Token(TokenKind.LITERAL, ch, self._pos, self._pos + 1, value=ch)
        self._pos += 1
        return token

    def _take_until(
        self, start: int, closing: str, reason: str, offset: int | None = None,
    ) -> int:
        """Return the index just past *closing*, searching from *start*."""
        idx = self._pattern.find(closing, start)
        if idx == -1:
            raise self._error(self._pos if offset is None else offset, reason)
        return idx + len(closing)

    # -- escapes -----------------------------------------------------------

    def _read_escape(self) -> Token:
        start = self._pos
        end, category, value = self._scan_escape(start)
        self._pos = end
        return Token(
            TokenKind.ESCAPE,
            self._pattern[start:end],
            start,
            end,
            value=value,
            escape=category,
        )

    def _scan_escape(self, start: int) -> tuple[int, EscapeCategory, str]:
        """Scan the escape beginning at *start* (a backslash).

        Returns (end offset, category, decoded value). The decoded value is
        the literal text for literal-capable categories and the escape letter
        otherwise.
        """
        pattern = self._pattern
        if start + 1 >= len(pattern):
            raise self._error(start, "dangling escape at end of pattern")

        ch = pattern[start + 1]
        pos = start + 2

        if not (ch.isascii() and ch.isalnum()):
            return pos, EscapeCategory.identity, ch
        if ch in _CONTROL_ESCAPES:
            return pos, EscapeCategory.control, _CONTROL_ESCAPES[ch]
        if ch == "c":
            if pos >= len(pattern) or not pattern[pos].isascii():
                raise self._error(start, "\\c must be followed by an ASCII character")
            return pos + 1, EscapeCategory.control, chr(ord(pattern[pos].upper()) ^ 0x40)
        if ch == "x":
            return self._scan_hex_escape(start, pos)
        if ch == "o":
            if pos >= len(pattern) or pattern[pos] != "{":
                raise self._error(start, "\\o must be followed by {...}")
            end = self._take_until(pos, "}", "unterminated \\o{...} escape", start)
            digits = pattern[pos + 1:end - 1]
            if not digits or any(d not in "01234567" for d in digits):
                raise self._error(start, "invalid octal escape")
            return end, EscapeCategory.codepoint, self._codepoint(start, int(digits, 8))
        if ch == "0":
            end = pos
            while end < len(pattern) and end < start + 4 and pattern[end] in "01234567":
                end += 1
            return end, EscapeCategory.codepoint, chr(int(pattern[start + 1:end], 8))
        if ch.isdigit():
            end = pos
            while end < len(pattern) and pattern[end].isdigit():
                end += 1
            return end, EscapeCategory.reference, pattern[start + 1:end]
        if ch in "gk":
            return self._scan_reference(start, pos, ch)
        if ch in "pP":
            if pos < len(pattern) and pattern[pos] == "{":
                end = self._take_until(pos, "}", "unterminated \\p{...} escape", start)
                if end - pos <= 2:
                    raise self._error(start, "empty unicode property name")
                return end, EscapeCategory.unicode_property, ch
            if pos >= len(pattern) or not pattern[pos].isalpha():
                raise self._error(start, "malformed unicode property escape")
            return pos + 1, EscapeCategory.unicode_property, ch
        if ch == "Q":
            close = pattern.find("\\E", pos)
            if close == -1:
                # PCRE quotes to the end of the pattern when \E is missing
                return len(pattern), EscapeCategory.quoted, pattern[pos:]
            return close + 2, EscapeCategory.quoted, pattern[pos:close]
        if ch == "E":
            # a stray \E is ignored by PCRE
            return pos, EscapeCategory.quoted, ""
        if ch in _SHORTHAND_ESCAPES:
            return pos, EscapeCategory.shorthand, ch
        if ch in _ASSERTION_ESCAPES:
            return pos, EscapeCategory.assertion, ch
        raise self._error(start, f"unrecognized escape sequence '\\{ch}'")

    def _scan_hex_escape(self, start: int, pos: int) -> tuple[int, EscapeCategory, str]:
        pattern = self._pattern
        if pos < len(pattern) and pattern[pos] == "{":
            end = self._take_until(pos, "}", "unterminated \\x{...} escape", start)
            digits = pattern[pos + 1:end - 1]
            if not _HEX_RE.fullmatch(digits):
                raise self._error(start, "invalid hexadecimal escape")
            return end, EscapeCategory.codepoint, self._codepoint(start, int(digits, 16))
        end = pos
        while end < len(pattern) and end < pos + 2 and pattern[end] in "0123456789abcdefABCDEF":
            end += 1
        value = int(pattern[pos:end], 16) if end > pos else 0
        return end, EscapeCategory.codepoint, chr(value)

    def _scan_reference(self, start: int, pos: int, letter: str) -> tuple[int, EscapeCategory, str]:
        pattern = self._pattern
        if pos >= len(pattern):
            raise self._error(start, f"\\{letter} is not followed by a group reference")
        opener = pattern[pos]
        closers = {"{": "}", "<": ">", "'": "'"}
        if opener in closers:
            end = self._take_until(pos + 1, closers[opener], f"unterminated \\{letter} reference", start)
            name = pattern[pos + 1:end - 1]
            if not name:
                raise self._error(start, f"empty \\{letter} reference")
            return end, EscapeCategory.reference, name
        if letter == "g":
            end = pos
            if end < len(pattern) and pattern[end] in "+-":
                end += 1
            digits_start = end
            while end < len(pattern) and pattern[end].isdigit():
                end += 1
            if end > digits_start:
                return end, EscapeCategory.reference, pattern[pos:end]
        raise self._error(start, f"\\{letter} is not followed by a group reference")

    def _codepoint(self, start: int, value: int) -> str:
        if value > MAX_CODEPOINT:
            raise self._error(start, "character code point value is too large")
        return chr(value)

    # -- character classes ---------------------------------------------------

    def _read_class(self) -> Token:
        pattern = self._pattern
        start = self._pos
        pos = start + 1
        negated = False
        if pos < len(pattern) and pattern[pos] == "^":
            negated = True
            pos += 1
        body_start = pos
        # a leading ']' is a literal member
        if pos < len(pattern) and pattern[pos] == "]":
            pos += 1

        while True:
            if pos >= len(pattern):
                raise self._error(start, "unterminated character class")
            ch = pattern[pos]
            if ch == "]":
                break
            if ch == "\\":
                pos, _, _ = self._scan_escape(pos)
                continue
            if ch == "[":
                posix = _POSIX_CLASS_RE.match(pattern, pos)
                if posix:
                    pos = posix.end()
                    continue
            pos += 1

        end = pos + 1
        self._pos = end
        return Token(
            TokenKind.CLASS,
            pattern[start:end],
            start,
            end,
            value=pattern[body_start:pos],
            negated=negated,
        )

    # -- groups --------------------------------------------------------------

    def _read_group_open(self) -> Token:
        pattern = self._pattern
        start = self._pos

        if pattern.startswith("(*", start):
            # backtracking control verbs and start-of-pattern options: (*UTF8)
            end = self._take_until(start, ")", "unterminated (*VERB) construct")
            self._pos = end
            return Token(TokenKind.OPTIONS, pattern[start:end], start, end)

        if not pattern.startswith("(?", start):
            return self._group(start, start + 1, GroupKind.capturing)

        pos = start + 2
        rest = pattern[pos:pos + 3]

        if rest.startswith(":"):
            return self._group(start, pos + 1, GroupKind.non_capturing)
        if rest.startswith("="):
            return self._group(start, pos + 1, GroupKind.lookahead)
        if rest.startswith("!"):
            return self._group(start, pos + 1, GroupKind.negative_lookahead)
        if rest.startswith("<="):
            return self._group(start, pos + 2, GroupKind.lookbehind)
        if rest.startswith("<!"):
            return self._group(start, pos + 2, GroupKind.negative_lookbehind)
        if rest.startswith(">"):
            return self._group(start, pos + 1, GroupKind.atomic)
        if rest.startswith("|"):
            return self._group(start, pos + 1, GroupKind.branch_reset)
        if rest.startswith("#"):
            end = self._take_until(pos, ")", "unterminated comment group")
            self._pos = end
            return Token(TokenKind.OPTIONS, pattern[start:end], start, end)
        if rest.startswith("("):
            end = self._take_until(pos, ")", "unterminated condition in conditional group")
            return self._group(start, end, GroupKind.conditional)

        for regex in (_NAMED_BACKREF_RE, _RECURSION_RE):
            ref = regex.match(pattern, start)
            if ref:
                self._pos = ref.end()
                return Token(
                    TokenKind.ESCAPE,
                    ref.group(0),
                    start,
                    ref.end(),
                    value=ref.group(0)[2:-1],
                    escape=EscapeCategory.reference,
                )

        for prefix, closing in (("P<", ">"), ("<", ">"), ("'", "'")):
            if pattern.startswith(prefix, pos):
                name_start = pos + len(prefix)
                name = _GROUP_NAME_RE.match(pattern, name_start)
                if not name or not pattern.startswith(closing, name.end()):
                    raise self._error(start, "malformed group name")
                return self._group(
                    start, name.end() + len(closing), GroupKind.named, name.group(0)
                )

        flags = _INLINE_FLAGS_RE.match(pattern, pos)
        end = flags.end() if flags else pos
        if end < len(pattern) and pattern[end] == ")":
            self._pos = end + 1
            return Token(TokenKind.OPTIONS, pattern[start:end + 1], start, end + 1)
        if end < len(pattern) and pattern[end] == ":":
            return self._group(start, end + 1, GroupKind.scoped_options)

        raise self._error(start, "unknown group construct")

    def _group(
        self,
        start: int,
        end: int,
        kind: GroupKind,
        name: str | None = None,
    ) -> Token:
        self._pos = end
        return Token(
            TokenKind.GROUP_OPEN,
            self._pattern[start:end],
            start,
            end,
            group_kind=kind,
            name=name,
        )

    # -- quantifiers ---------------------------------------------------------

    def _read_simple_quantifier(self) -> Token:
        start = self._pos
        ch = self._pattern[start]
        bounds = {"*": (0, None), "+": (1, None), "?": (0, 1)}[ch]
        return self._quantifier(start, start + 1, *bounds)

    def _read_brace(self) -> Token:
        start = self._pos
        bound = _BOUND_RE.match(self._pattern, start)
        if not bound:
            # not a valid bound: PCRE treats the brace as a literal
            return self._literal("{")

        low = int(bound.group(1))
        if bound.group(2) is None:
            high: int | None = low
        elif bound.group(3):
            high = int(bound.group(3))
        else:
            high = None

        if low > MAX_QUANTIFIER_BOUND or (high is not None and high > MAX_QUANTIFIER_BOUND):
            raise self._error(start, f"quantifier bound exceeds {MAX_QUANTIFIER_BOUND}")
        if high is not None and high < low:
            raise self._error(start, f"invalid quantifier bound '{bound.group(0)}'")
        return self._quantifier(start, bound.end(), low, high)

    def _quantifier(self, start: int, end: int, low: int, high: int | None) -> Token:
        lazy = possessive = False
        if end < len(self._pattern):
            if self._pattern[end] == "?":
                lazy = True
                end += 1
            elif self._pattern[end] == "+":
                possessive = True
                end += 1
        self._pos = end
        return Token(
            TokenKind.QUANTIFIER,
            self._pattern[start:end],
            start,
            end,
            min=low,
            max=high,
            lazy=lazy,
            possessive=possessive,
        )


def tokenize(pattern: str) -> list[Token]:
    """Split *pattern* into tokens.

    Raises MalformedPatternError for unterminated classes or groups prefixes,
    dangling escapes and invalid quantifier bounds.
    """
    return _Lexer(pattern).run()


def decode_class_escape(pattern: str, start: int) -> tuple[int, EscapeCategory, str]:
    """Decode the escape at *start* using the tokenizer's escape rules."""
    lexer = _Lexer(pattern)
    return lexer._scan_escape(start)
