"""Exception hierarchy for ignore-pattern validation."""

from __future__ import annotations


class IgnoreLintError(Exception):
    """Base class for all errors raised by ignorelint."""


class MalformedPatternError(IgnoreLintError):
    """A pattern does not parse under the supported regex grammar.

    ``offset`` is the index into the pattern string where parsing failed.
    """

    def __init__(self, offset: int, reason: str, pattern: str = "") -> None:
        self.offset = offset
        self.reason = reason
        self.pattern = pattern
        super().__init__(f"{reason} at offset {offset}")

    def with_pattern(self, pattern: str) -> MalformedPatternError:
        """Return a copy carrying the full pattern text."""
        return MalformedPatternError(self.offset, self.reason, pattern)


class ConfigError(IgnoreLintError):
    """Configuration file is missing, unreadable or has the wrong shape."""


class InvalidIgnoredErrorPatternsError(IgnoreLintError):
    """One or more ignore-error patterns failed validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n\n".join(self.errors))
