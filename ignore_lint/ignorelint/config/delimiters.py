"""Split a delimited PCRE pattern (``#...#i``) into its body and modifiers."""

from __future__ import annotations

from ignorelint.errors import MalformedPatternError

BRACKET_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
VALID_MODIFIERS = frozenset("imsxuADSUXJn")


def split_delimiters(regex: str) -> tuple[str, str]:
    """Return ``(body, modifiers)`` for a delimited pattern.

    Raises MalformedPatternError for a missing or invalid delimiter and for
    unknown modifiers.
    """
    if not regex:
        raise MalformedPatternError(0, "empty regular expression", regex)

    opening = regex[0]
    if opening.isalnum() or opening == "\\" or opening.isspace():
        raise MalformedPatternError(
            0, "delimiter must not be alphanumeric, backslash, or whitespace", regex
        )

    closing = BRACKET_DELIMITERS.get(opening, opening)
    end = regex.rfind(closing)
    if end <= 0:
        raise MalformedPatternError(
            len(regex), f"no ending delimiter '{closing}' found", regex
        )

    modifiers = regex[end + 1:]
    for i, modifier in enumerate(modifiers):
        if modifier not in VALID_MODIFIERS:
            raise MalformedPatternError(
                end + 1 + i, f"unknown modifier '{modifier}'", regex
            )
    return regex[1:end], modifiers
