"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

# Add ignore_lint/ to Python path so `from ignorelint.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "ignore_lint"))

import pytest

from ignorelint.resolver.registry import MappingTypeResolver
from ignorelint.validator.pipeline import IgnoredRegexValidator

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def foo_bar_resolver() -> MappingTypeResolver:
    """Resolves only Foo and Bar."""
    return MappingTypeResolver({"Foo": "class Foo", "Bar": "interface Bar"})


@pytest.fixture
def validator(foo_bar_resolver: MappingTypeResolver) -> IgnoredRegexValidator:
    return IgnoredRegexValidator(foo_bar_resolver)
