"""Universal-match check — patterns with no discriminating content."""

from __future__ import annotations

import re

from ignorelint.regex.nodes import (
    Anchor,
    AnchorKind,
    AnyChar,
    Group,
    Quantifier,
    Sequence,
    SyntaxNode,
)
from ignorelint.validator.models import UniversalMatch


def _strip_anchors(node: SyntaxNode) -> SyntaxNode:
    """Drop one leading ``^`` and one trailing ``$`` from a sequence.

    ``^$`` keeps both anchors: it only matches an empty message.
    """
    if not isinstance(node, Sequence):
        return node
    items = list(node.items)
    if items and isinstance(items[0], Anchor) and items[0].kind == AnchorKind.START:
        items.pop(0)
    if items and isinstance(items[-1], Anchor) and items[-1].kind == AnchorKind.END:
        items.pop()
    if len(items) == 1:
        return items[0]
    return node


def _unwrap(node: SyntaxNode) -> SyntaxNode:
    node = _strip_anchors(node)
    while isinstance(node, Group) and node.is_plain:
        node = _strip_anchors(node.body)
    return node


def is_empty_reduction(node: SyntaxNode) -> bool:
    """An empty sequence or a lone anchor, both of which match any message."""
    if isinstance(node, Sequence):
        return not node.items
    return isinstance(node, Anchor)


def is_match_anything(node: SyntaxNode) -> bool:
    """``.*``, ``.+``, ``.*?`` and ``.{0,}`` style nodes."""
    return (
        isinstance(node, Quantifier)
        and isinstance(node.child, AnyChar)
        and node.min <= 1
        and node.is_unbounded
    )


def escape_sequence(sequence: str) -> str:
    """Escape every metacharacter so the sequence matches itself literally."""
    return re.escape(sequence)


def check_universal_match(root: SyntaxNode, pattern: str) -> UniversalMatch | None:
    """Detect patterns that ignore every message.

    Empty reductions (``""``, ``^``, ``()``, ``^(?:)$``) report the whole
    pattern as the wrong sequence; match-anything nodes report their own
    source text.
    """
    node = _unwrap(root)
    if is_empty_reduction(node):
        wrong = pattern
    elif is_match_anything(node):
        wrong = pattern[node.start:node.end]
    else:
        return None
    return UniversalMatch(wrong_sequence=wrong, escaped_sequence=escape_sequence(wrong))
