"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends

from ignorelint.checker.engine import IgnoreErrorsChecker
from ignorelint.validator.pipeline import IgnoredRegexValidator

_validator: IgnoredRegexValidator | None = None


def get_validator() -> IgnoredRegexValidator:
    """FastAPI dependency: return the shared IgnoredRegexValidator."""
    assert _validator is not None, "IgnoredRegexValidator not initialised"
    return _validator


def get_checker(
    validator: IgnoredRegexValidator = Depends(get_validator),
) -> IgnoreErrorsChecker:
    """FastAPI dependency: return a checker over the shared validator."""
    return IgnoreErrorsChecker(validator)
