"""Abstract type resolver interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TypeResolver(ABC):
    """Decides whether a literal string names a known type.

    Implementations must not mutate shared state and must accept any string,
    returning ``None`` for anything that is not a known type name.
    """

    @abstractmethod
    def resolve(self, name: str) -> str | None:
        """Return a description of the type *name* refers to, or ``None``."""
        ...


class NullTypeResolver(TypeResolver):
    """Resolver for contexts without a type universe; never finds anything."""

    def resolve(self, name: str) -> str | None:
        return None
