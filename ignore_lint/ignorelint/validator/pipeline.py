"""Validation pipeline — parse a pattern and run every check on the tree."""

from __future__ import annotations

import logging

from ignorelint.regex.parser import parse
from ignorelint.resolver.base import NullTypeResolver, TypeResolver
from ignorelint.validator.alternation import check_ignored_types
from ignorelint.validator.anchors import check_anchor_in_middle
from ignorelint.validator.models import ValidationResult
from ignorelint.validator.universal import check_universal_match

logger = logging.getLogger(__name__)


class IgnoredRegexValidator:
    """Validates ignore-error patterns against common authoring mistakes.

    Stateless apart from the type resolver it was built with, so one
    instance can validate many patterns, including from several threads.
    """

    def __init__(self, type_resolver: TypeResolver | None = None) -> None:
        self._type_resolver = type_resolver if type_resolver is not None else NullTypeResolver()

    @property
    def type_resolver(self) -> TypeResolver:
        return self._type_resolver

    def validate(self, pattern: str) -> ValidationResult:
        """Validate one delimiter-stripped pattern.

        Order: 1. ignored types → 2. anchor in the middle → 3. universal match.
        Raises MalformedPatternError when the pattern does not parse.
        """
        tree = parse(pattern)

        findings = []
        ignored = check_ignored_types(tree, self._type_resolver)
        if ignored is not None:
            findings.append(ignored)
        anchor = check_anchor_in_middle(tree)
        if anchor is not None:
            findings.append(anchor)
        universal = check_universal_match(tree, pattern)
        if universal is not None:
            findings.append(universal)

        logger.debug("Pattern %r produced %d findings", pattern, len(findings))
        return ValidationResult(pattern=pattern, findings=tuple(findings))


def validate(pattern: str, type_resolver: TypeResolver | None = None) -> ValidationResult:
    """Validate *pattern* with a one-off validator."""
    return IgnoredRegexValidator(type_resolver).validate(pattern)
