"""FastAPI application -- ignore-pattern linter entrypoint."""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI

import ignorelint.deps as deps
from ignorelint.api.validate import router as validate_router
from ignorelint.resolver.base import TypeResolver
from ignorelint.resolver.keywords import KeywordTypeResolver
from ignorelint.resolver.registry import ChainTypeResolver, MappingTypeResolver, load_known_types
from ignorelint.validator.pipeline import IgnoredRegexValidator

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _load_options() -> dict:
    """Load options from a JSON file or fall back to environment variables."""
    opts_path = os.environ.get("IGNORELINT_OPTIONS_PATH", "ignorelint.json")
    if Path(opts_path).exists():
        return json.loads(Path(opts_path).read_text())
    return {
        "known_types_path": os.environ.get("IGNORELINT_KNOWN_TYPES_PATH", ""),
        "use_keyword_types": os.environ.get("IGNORELINT_USE_KEYWORD_TYPES", "true").lower()
        not in ("0", "false", "no"),
    }


def build_type_resolver(options: dict) -> TypeResolver:
    """Assemble the type resolver chain described by *options*."""
    resolvers: list[TypeResolver] = []
    if options.get("use_keyword_types", True):
        resolvers.append(KeywordTypeResolver())

    known_types_path = options.get("known_types_path") or ""
    if known_types_path:
        resolvers.append(MappingTypeResolver(load_known_types(Path(known_types_path))))

    return ChainTypeResolver(resolvers)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build the validator on startup, drop it on shutdown."""
    log_level = logging.DEBUG if os.environ.get("IGNORELINT_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    options = _load_options()
    logger.info("ignorelint starting with options: %s", options)

    deps._validator = IgnoredRegexValidator(build_type_resolver(options))

    yield

    deps._validator = None


app = FastAPI(
    title="ignorelint",
    version=VERSION,
    lifespan=lifespan,
)

app.include_router(validate_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "version": VERSION}
