"""Validation pipeline for ignore-error patterns."""

from ignorelint.validator.models import (
    AnchorInMiddle,
    Finding,
    IgnoredTypesFound,
    UniversalMatch,
    ValidationResult,
)
from ignorelint.validator.pipeline import IgnoredRegexValidator, validate

__all__ = [
    "AnchorInMiddle",
    "Finding",
    "IgnoredRegexValidator",
    "IgnoredTypesFound",
    "UniversalMatch",
    "ValidationResult",
    "validate",
]
