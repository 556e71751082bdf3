"""User-facing message text for validation findings."""

from __future__ import annotations

from ignorelint.errors import MalformedPatternError
from ignorelint.validator.models import (
    AnchorInMiddle,
    IgnoredTypesFound,
    UniversalMatch,
    ValidationResult,
)


def ignored_types_message(regex: str, ignored_types: dict[str, str]) -> str:
    types = "\n".join(f"* {description}" for description in ignored_types.values())
    return (
        f"Ignored error {regex} has an unescaped '|' which leads to ignoring more "
        f"errors than intended. Use '\\|' instead.\n"
        f"It ignores all errors containing the following types:\n{types}"
    )


def anchor_in_middle_message(regex: str) -> str:
    return (
        f"Ignored error {regex} has an unescaped anchor '$' in the middle. "
        f"This leads to unintended behavior. Use '\\$' instead."
    )


def universal_match_message(regex: str, wrong_sequence: str, escaped_sequence: str) -> str:
    return (
        f"Ignored error {regex} has an unescaped '{wrong_sequence}' which leads to "
        f"ignoring all errors. Use '{escaped_sequence}' instead."
    )


def malformed_pattern_message(regex: str, error: MalformedPatternError) -> str:
    return (
        f"Ignored error {regex} is not a valid regular expression: "
        f"{error.reason} at offset {error.offset}."
    )


def format_findings(regex: str, result: ValidationResult) -> list[str]:
    """Render one message per finding, preserving the result's order."""
    messages: list[str] = []
    for finding in result.findings:
        if isinstance(finding, IgnoredTypesFound):
            messages.append(ignored_types_message(regex, finding.types))
        elif isinstance(finding, AnchorInMiddle):
            messages.append(anchor_in_middle_message(regex))
        elif isinstance(finding, UniversalMatch):
            messages.append(
                universal_match_message(regex, finding.wrong_sequence, finding.escaped_sequence)
            )
    return messages
