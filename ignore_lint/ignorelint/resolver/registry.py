"""Type resolvers backed by explicit tables of known type names."""

from __future__ import annotations

import logging
import re
from io import StringIO
from pathlib import Path

from ruamel.yaml import YAML, YAMLError

from ignorelint.errors import ConfigError
from ignorelint.resolver.base import TypeResolver

logger = logging.getLogger(__name__)

# Class-like names, optionally namespaced: Foo, Foo\Bar, \Foo\Bar, foo.bar.Baz
TYPE_NAME_RE = re.compile(r"^\\?[A-Za-z_][A-Za-z0-9_]*(?:[\\.][A-Za-z_][A-Za-z0-9_]*)*$")


def _normalize(name: str) -> str:
    return name.strip().lstrip("\\").lower()


class MappingTypeResolver(TypeResolver):
    """Look names up in a ``name -> description`` table.

    Matching ignores case and a leading namespace separator, so ``\\Foo\\Bar``
    and ``foo\\bar`` both find an entry registered as ``Foo\\Bar``.
    """

    def __init__(self, types: dict[str, str]) -> None:
        self._types = {_normalize(name): desc for name, desc in types.items()}

    def __len__(self) -> int:
        return len(self._types)

    def resolve(self, name: str) -> str | None:
        candidate = name.strip()
        if not TYPE_NAME_RE.match(candidate):
            return None
        return self._types.get(_normalize(candidate))


class ChainTypeResolver(TypeResolver):
    """Ask several resolvers in order; the first answer wins."""

    def __init__(self, resolvers: list[TypeResolver]) -> None:
        self._resolvers = list(resolvers)

    def resolve(self, name: str) -> str | None:
        for resolver in self._resolvers:
            description = resolver.resolve(name)
            if description is not None:
                return description
        return None


def parse_known_types(data: object) -> dict[str, str]:
    """Build a name -> description table from parsed YAML.

    Accepts a mapping (``Foo: "class Foo"``), a list of names, or a mapping
    with a ``types`` key holding either form. Names listed without a
    description describe themselves.
    """
    if isinstance(data, dict) and "types" in data:
        data = data["types"]

    if data is None:
        return {}
    if isinstance(data, dict):
        return {
            str(name): str(desc) if desc is not None else str(name)
            for name, desc in data.items()
        }
    if isinstance(data, list):
        return {str(name): str(name) for name in data if name is not None}
    raise ConfigError(
        f"Known types must be a mapping or a list, got {type(data).__name__}"
    )


def load_known_types(path: Path) -> dict[str, str]:
    """Load a known-types table from a YAML file."""
    if not path.exists():
        raise ConfigError(f"Known types file not found: {path}")

    yaml = YAML(typ="safe")
    try:
        data = yaml.load(StringIO(path.read_text(encoding="utf-8")))
    except YAMLError as e:
        raise ConfigError(f"Failed to parse known types file {path}: {e}") from e

    types = parse_known_types(data)
    logger.info("Loaded %d known types from %s", len(types), path)
    return types
