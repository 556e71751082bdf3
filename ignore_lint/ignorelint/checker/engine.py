"""Checker — validates every configured ignore pattern and collects errors."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from ignorelint.config.delimiters import split_delimiters
from ignorelint.config.loader import IgnoreConfig
from ignorelint.errors import InvalidIgnoredErrorPatternsError, MalformedPatternError
from ignorelint.reporting.messages import format_findings, malformed_pattern_message
from ignorelint.validator.pipeline import IgnoredRegexValidator

logger = logging.getLogger(__name__)


class CheckReport(BaseModel):
    """Outcome of checking all ignore patterns of one configuration."""

    errors: list[str] = Field(default_factory=list)
    checked: int = 0
    skipped: int = 0

    @property
    def valid(self) -> bool:
        return not self.errors


class IgnoreErrorsChecker:
    """Runs the validator over a configuration's ignoreErrors list."""

    def __init__(self, validator: IgnoredRegexValidator) -> None:
        self._validator = validator

    def check_pattern(self, regex: str) -> list[str]:
        """Validate one delimited pattern and return its error messages."""
        try:
            body, _modifiers = split_delimiters(regex)
            result = self._validator.validate(body)
        except MalformedPatternError as e:
            logger.debug("Pattern %r is malformed: %s", regex, e)
            return [malformed_pattern_message(regex, e)]
        return format_findings(regex, result)

    def check(self, config: IgnoreConfig) -> CheckReport:
        """Check every pattern in *config*.

        Nothing is checked when validation is switched off. Baseline entries
        are skipped because they were generated from real errors.
        """
        report = CheckReport()
        if not config.validate_patterns or not config.ignore_errors:
            return report

        for entry in config.ignore_errors:
            if entry.is_from_baseline:
                report.skipped += 1
                continue
            for regex in entry.patterns:
                report.checked += 1
                report.errors.extend(self.check_pattern(regex))

        logger.info(
            "Checked %d ignore patterns (%d baseline entries skipped), %d errors",
            report.checked,
            report.skipped,
            len(report.errors),
        )
        return report

    def assert_valid(self, config: IgnoreConfig) -> CheckReport:
        """Like check(), but raise InvalidIgnoredErrorPatternsError on errors."""
        report = self.check(config)
        if report.errors:
            raise InvalidIgnoredErrorPatternsError(report.errors)
        return report
