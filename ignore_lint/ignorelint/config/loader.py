"""Load ignore-error entries from the host tool's configuration."""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml import YAML, YAMLError

from ignorelint.errors import ConfigError

logger = logging.getLogger(__name__)


class IgnoreErrorEntry(BaseModel):
    """One ``ignoreErrors`` item: a bare pattern or a mapping."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: str | None = None
    messages: list[str] = Field(default_factory=list)
    raw_message: str | None = Field(None, alias="rawMessage")
    identifier: str | None = None
    path: str | None = None
    paths: list[str] = Field(default_factory=list)
    count: int | None = None
    report_unmatched: bool | None = Field(None, alias="reportUnmatched")

    @property
    def is_from_baseline(self) -> bool:
        """Baseline entries carry a count and are generated, hence correct."""
        return self.count is not None

    @property
    def patterns(self) -> list[str]:
        """All regex patterns this entry contributes, in order."""
        patterns = [self.message] if self.message is not None else []
        patterns.extend(self.messages)
        return patterns


class IgnoreConfig(BaseModel):
    validate_patterns: bool = True
    ignore_errors: list[IgnoreErrorEntry] = Field(default_factory=list)


def _parse_entry(raw: Any, index: int) -> IgnoreErrorEntry:
    if isinstance(raw, str):
        return IgnoreErrorEntry(message=raw)
    if isinstance(raw, dict):
        try:
            return IgnoreErrorEntry.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid ignoreErrors entry #{index}: {e}") from e
    raise ConfigError(
        f"ignoreErrors entry #{index} must be a string or a mapping, got {type(raw).__name__}"
    )


def parse_ignore_config(data: Any) -> IgnoreConfig:
    """Build an IgnoreConfig from parsed configuration data.

    Accepts the full config (``parameters: {ignoreErrors: [...]}``) or just
    the ``parameters`` mapping.
    """
    if data is None:
        return IgnoreConfig()
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    params = data.get("parameters", data)
    if params is None:
        return IgnoreConfig()
    if not isinstance(params, dict):
        raise ConfigError("'parameters' must be a mapping")

    raw_entries = params.get("ignoreErrors") or []
    if not isinstance(raw_entries, list):
        raise ConfigError("'ignoreErrors' must be a list")

    entries = [_parse_entry(raw, i) for i, raw in enumerate(raw_entries)]
    return IgnoreConfig(
        validate_patterns=bool(params.get("__validate", True)),
        ignore_errors=entries,
    )


def load_ignore_config_text(text: str) -> IgnoreConfig:
    """Parse configuration from a YAML/NEON-style string."""
    yaml = YAML(typ="safe")
    try:
        data = yaml.load(StringIO(text))
    except YAMLError as e:
        raise ConfigError(f"Failed to parse configuration: {e}") from e
    return parse_ignore_config(data)


def load_ignore_config(path: Path) -> IgnoreConfig:
    """Load configuration from a file on disk."""
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    config = load_ignore_config_text(path.read_text(encoding="utf-8"))
    logger.info("Loaded %d ignoreErrors entries from %s", len(config.ignore_errors), path)
    return config
