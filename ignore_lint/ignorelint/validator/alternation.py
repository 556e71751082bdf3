"""Ignored-types check — inspect top-level alternation branches.

A top-level unescaped ``|`` usually means the author wanted a literal pipe
(``int|string`` in a message) and created an alternation that also ignores
every message mentioning one of the branch texts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ignorelint.regex.nodes import Alternation, Escape, Literal, Sequence, SyntaxNode
from ignorelint.resolver.base import TypeResolver
from ignorelint.validator.models import IgnoredTypesFound

logger = logging.getLogger(__name__)

# Characters that still mean something to a regex author after un-escaping
REGEX_SIGNIFICANT = frozenset(".^$|?*+()[]{}")


@dataclass(frozen=True)
class AlternationBranch:
    """One branch of the top-level alternation and its literal text, if any."""

    node: SyntaxNode
    literal_text: str | None


def _node_text(node: SyntaxNode) -> str | None:
    """Reconstruct the literal text a node matches, or None if it is not literal."""
    if isinstance(node, Literal):
        return node.char
    if isinstance(node, Escape):
        return node.literal_text
    if isinstance(node, Sequence):
        parts: list[str] = []
        for item in node.items:
            text = _node_text(item)
            if text is None:
                return None
            parts.append(text)
        return "".join(parts)
    return None


def branch_literal_text(node: SyntaxNode) -> str | None:
    """Return the candidate type name for a branch, or None.

    The branch must consist only of literals and literal escapes, and the
    un-escaped text must be non-empty and free of regex-significant
    characters.
    """
    text = _node_text(node)
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    if any(ch in REGEX_SIGNIFICANT for ch in text):
        return None
    return text


def extract_branches(root: SyntaxNode) -> list[AlternationBranch]:
    """Return the branches of a root-level alternation.

    Alternations nested in groups are intentional and are not returned.
    """
    if not isinstance(root, Alternation) or len(root.branches) < 2:
        return []
    return [
        AlternationBranch(node=branch, literal_text=branch_literal_text(branch))
        for branch in root.branches
    ]


def _safe_resolve(resolver: TypeResolver, name: str) -> str | None:
    try:
        return resolver.resolve(name)
    except Exception:
        logger.warning("Type resolver failed for %r, treating it as unknown", name, exc_info=True)
        return None


def check_ignored_types(root: SyntaxNode, resolver: TypeResolver) -> IgnoredTypesFound | None:
    """Resolve literal top-level branches against the type universe."""
    types: dict[str, str] = {}
    for branch in extract_branches(root):
        if branch.literal_text is None:
            continue
        description = _safe_resolve(resolver, branch.literal_text)
        if description is not None:
            types.setdefault(branch.literal_text, description)

    if not types:
        return None
    return IgnoredTypesFound(types=types)
