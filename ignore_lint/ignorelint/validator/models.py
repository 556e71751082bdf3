"""Validation data models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class IgnoredTypesFound(BaseModel):
    """A top-level unescaped ``|`` whose branches name known types."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ignored_types"] = "ignored_types"
    # literal branch text -> resolved type description, in branch order
    types: dict[str, str]


class AnchorInMiddle(BaseModel):
    """An unescaped ``$`` that is not at the end of the pattern."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["anchor_in_middle"] = "anchor_in_middle"
    offsets: tuple[int, ...] = ()


class UniversalMatch(BaseModel):
    """A pattern that matches every message."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["universal_match"] = "universal_match"
    wrong_sequence: str
    escaped_sequence: str


Finding = Annotated[
    Union[IgnoredTypesFound, AnchorInMiddle, UniversalMatch],
    Field(discriminator="kind"),
]


class ValidationResult(BaseModel):
    """All findings for one pattern, in a fixed order.

    Ignored types come first, then the mid-pattern anchor, then the universal
    match.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    findings: tuple[Finding, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not self.findings

    def _first(self, finding_type: type) -> Finding | None:
        for finding in self.findings:
            if isinstance(finding, finding_type):
                return finding
        return None

    @property
    def ignored_types(self) -> dict[str, str]:
        finding = self._first(IgnoredTypesFound)
        return dict(finding.types) if finding else {}

    @property
    def has_ignored_types(self) -> bool:
        return bool(self.ignored_types)

    @property
    def has_anchor_in_middle(self) -> bool:
        return self._first(AnchorInMiddle) is not None

    @property
    def is_universal_match(self) -> bool:
        return self._first(UniversalMatch) is not None

    @property
    def wrong_sequence(self) -> str | None:
        finding = self._first(UniversalMatch)
        return finding.wrong_sequence if finding else None

    @property
    def escaped_wrong_sequence(self) -> str | None:
        finding = self._first(UniversalMatch)
        return finding.escaped_sequence if finding else None
