"""Tests for ignorelint.validator.universal — the universal-match check."""

from __future__ import annotations

import pytest

from ignorelint.regex.parser import parse
from ignorelint.validator.universal import check_universal_match, escape_sequence


def _check(pattern: str):
    return check_universal_match(parse(pattern), pattern)


class TestUniversalMatch:
    def test_dot_star(self) -> None:
        finding = _check(".*")
        assert finding is not None
        assert finding.wrong_sequence == ".*"
        assert finding.escaped_sequence == r"\.\*"

    def test_dot_plus(self) -> None:
        finding = _check(".+")
        assert finding.wrong_sequence == ".+"
        assert finding.escaped_sequence == r"\.\+"

    def test_empty_pattern(self) -> None:
        finding = _check("")
        assert finding is not None
        assert finding.wrong_sequence == ""

    @pytest.mark.parametrize(
        ("pattern", "escaped"),
        [
            ("^", r"\^"),
            ("$", r"\$"),
            ("()", r"\(\)"),
            ("(?:)", r"\(\?:\)"),
            ("^(?:)$", r"\^\(\?:\)\$"),
            ("(^)", r"\(\^\)"),
        ],
    )
    def test_empty_reductions(self, pattern: str, escaped: str) -> None:
        finding = _check(pattern)
        assert finding is not None
        assert finding.wrong_sequence == pattern
        assert finding.escaped_sequence == escaped

    @pytest.mark.parametrize(
        ("pattern", "sequence"),
        [
            ("^.*$", ".*"),
            ("^.*", ".*"),
            (".*$", ".*"),
            ("(?:.*)", ".*"),
            ("(.+)", ".+"),
            ("^(?:^.*$)$", ".*"),
            (".*?", ".*?"),
            (".{0,}", ".{0,}"),
        ],
    )
    def test_wrapped_forms(self, pattern: str, sequence: str) -> None:
        finding = _check(pattern)
        assert finding is not None
        assert finding.wrong_sequence == sequence

    @pytest.mark.parametrize(
        "pattern",
        [
            "foo.*bar",
            ".*foo",
            "a*",
            ".",
            ".?",
            ".{2,}",
            ".{0,5}",
            "^$",
            "(?=.*)",
            "[^x]*",
            r"\.\*",
            ".*|foo",
        ],
    )
    def test_not_universal(self, pattern: str) -> None:
        assert _check(pattern) is None


class TestEscapeSequence:
    def test_escapes_every_metacharacter(self) -> None:
        assert escape_sequence(".{0,}") == r"\.\{0,\}"
        assert escape_sequence(".*?") == r"\.\*\?"
