"""Mid-pattern anchor check.

A ``$`` anywhere but the structural end of the pattern is almost always a
literal dollar sign the author forgot to escape. Only ``$`` is checked;
``^`` is left alone.
"""

from __future__ import annotations

from ignorelint.regex.nodes import (
    Alternation,
    Anchor,
    AnchorKind,
    Group,
    InlineOptions,
    Quantifier,
    Sequence,
    SyntaxNode,
)
from ignorelint.validator.models import AnchorInMiddle


def _last_consuming(items: tuple[SyntaxNode, ...]) -> int:
    """Index of the last item that is not a zero-width option setting."""
    for i in range(len(items) - 1, -1, -1):
        if not isinstance(items[i], InlineOptions):
            return i
    return len(items) - 1


def _misplaced_end_anchors(root: SyntaxNode) -> list[int]:
    """Collect offsets of ``$`` anchors that are not at the end, in source order.

    Each node is visited with *at_end*: whether nothing but closing group
    delimiters and inline options follows it up to the end of the pattern.
    Quantifiers and groups pass it through unchanged; only the trailing items
    of a sequence and the last branch of an alternation inherit it.
    """
    offsets: list[int] = []
    stack: list[tuple[SyntaxNode, bool]] = [(root, True)]
    while stack:
        node, at_end = stack.pop()
        if isinstance(node, Anchor):
            if node.kind == AnchorKind.END and not at_end:
                offsets.append(node.start)
        elif isinstance(node, Group):
            stack.append((node.body, at_end))
        elif isinstance(node, Quantifier):
            stack.append((node.child, at_end))
        elif isinstance(node, Sequence):
            last = _last_consuming(node.items)
            for i in range(len(node.items) - 1, -1, -1):
                stack.append((node.items[i], at_end and i >= last))
        elif isinstance(node, Alternation):
            last = len(node.branches) - 1
            for i in range(last, -1, -1):
                stack.append((node.branches[i], at_end and i == last))
    return offsets


def check_anchor_in_middle(root: SyntaxNode) -> AnchorInMiddle | None:
    """Flag every ``$`` that does not terminate the pattern."""
    offsets = _misplaced_end_anchors(root)
    if not offsets:
        return None
    return AnchorInMiddle(offsets=tuple(offsets))
