"""Validate API — check single patterns or a whole ignoreErrors config."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ignorelint.checker.engine import CheckReport, IgnoreErrorsChecker
from ignorelint.config.delimiters import split_delimiters
from ignorelint.config.loader import load_ignore_config_text
from ignorelint.deps import get_checker, get_validator
from ignorelint.errors import ConfigError, MalformedPatternError
from ignorelint.reporting.messages import format_findings
from ignorelint.validator.models import Finding
from ignorelint.validator.pipeline import IgnoredRegexValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    pattern: str = Field(..., max_length=4096)
    delimited: bool = Field(
        False, description="Whether the pattern carries delimiters, e.g. '#foo#i'"
    )


class ValidateResponse(BaseModel):
    pattern: str
    valid: bool
    findings: list[Finding] = Field(default_factory=list)
    messages: list[str] = Field(default_factory=list)


class ConfigCheckRequest(BaseModel):
    config_yaml: str


@router.post("/validate", response_model=ValidateResponse)
async def validate_pattern(
    request: ValidateRequest,
    validator: IgnoredRegexValidator = Depends(get_validator),
) -> ValidateResponse:
    """Validate one ignore pattern and describe what is wrong with it."""
    try:
        body = split_delimiters(request.pattern)[0] if request.delimited else request.pattern
        result = validator.validate(body)
    except MalformedPatternError as e:
        raise HTTPException(
            400, detail={"offset": e.offset, "reason": e.reason}
        ) from e

    return ValidateResponse(
        pattern=request.pattern,
        valid=result.is_clean,
        findings=list(result.findings),
        messages=format_findings(request.pattern, result),
    )


@router.post("/validate/config", response_model=CheckReport)
async def validate_config(
    request: ConfigCheckRequest,
    checker: IgnoreErrorsChecker = Depends(get_checker),
) -> CheckReport:
    """Check every ignoreErrors pattern of a configuration document."""
    try:
        config = load_ignore_config_text(request.config_yaml)
    except ConfigError as e:
        raise HTTPException(400, detail=str(e)) from e

    return checker.check(config)
