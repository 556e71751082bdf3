"""Tests for ignorelint.config.loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from ignorelint.config.loader import (
    IgnoreErrorEntry,
    load_ignore_config,
    load_ignore_config_text,
    parse_ignore_config,
)
from ignorelint.errors import ConfigError


class TestIgnoreErrorEntry:
    def test_message_patterns(self) -> None:
        entry = IgnoreErrorEntry(message="#a#", messages=["#b#", "#c#"])
        assert entry.patterns == ["#a#", "#b#", "#c#"]

    def test_identifier_only_has_no_patterns(self) -> None:
        assert IgnoreErrorEntry(identifier="missingType.iterableValue").patterns == []

    def test_baseline(self) -> None:
        assert IgnoreErrorEntry(message="#a#", count=2).is_from_baseline is True
        assert IgnoreErrorEntry(message="#a#").is_from_baseline is False

    def test_aliases(self) -> None:
        entry = IgnoreErrorEntry.model_validate(
            {"rawMessage": "Foo|Bar", "reportUnmatched": False}
        )
        assert entry.raw_message == "Foo|Bar"
        assert entry.report_unmatched is False
        assert entry.patterns == []


class TestParseIgnoreConfig:
    def test_full_config(self) -> None:
        config = parse_ignore_config(
            {"parameters": {"ignoreErrors": ["#a#", {"message": "#b#", "path": "x.php"}]}}
        )
        assert config.validate_patterns is True
        assert [e.message for e in config.ignore_errors] == ["#a#", "#b#"]
        assert config.ignore_errors[1].path == "x.php"

    def test_parameters_only(self) -> None:
        config = parse_ignore_config({"ignoreErrors": ["#a#"]})
        assert len(config.ignore_errors) == 1

    def test_validation_switched_off(self) -> None:
        config = parse_ignore_config({"parameters": {"__validate": False, "ignoreErrors": ["#a#"]}})
        assert config.validate_patterns is False

    def test_empty(self) -> None:
        assert parse_ignore_config(None).ignore_errors == []
        assert parse_ignore_config({"parameters": None}).ignore_errors == []
        assert parse_ignore_config({"parameters": {"level": 5}}).ignore_errors == []

    @pytest.mark.parametrize(
        "data",
        [
            ["#a#"],
            {"parameters": ["#a#"]},
            {"parameters": {"ignoreErrors": "#a#"}},
            {"parameters": {"ignoreErrors": [42]}},
            {"parameters": {"ignoreErrors": [{"count": "many"}]}},
        ],
    )
    def test_invalid_shapes(self, data: object) -> None:
        with pytest.raises(ConfigError):
            parse_ignore_config(data)


class TestLoadIgnoreConfig:
    def test_load_fixture(self, fixtures_dir: Path) -> None:
        config = load_ignore_config(fixtures_dir / "phpstan.neon")
        assert len(config.ignore_errors) == 7
        assert config.ignore_errors[0].message == r"#Call to an undefined method Foo::bar\(\)#"
        assert config.ignore_errors[4].messages[1] == "#Method .* has no return type$ specified#"
        assert config.ignore_errors[5].is_from_baseline
        assert config.ignore_errors[6].identifier == "missingType.iterableValue"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_ignore_config(tmp_path / "nope.neon")

    def test_broken_text(self) -> None:
        with pytest.raises(ConfigError):
            load_ignore_config_text("parameters: {ignoreErrors: [")
