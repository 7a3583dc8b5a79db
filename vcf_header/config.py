"""
Runtime settings, read from the environment (and a ``.env`` file if present).

    VCF_HEADER_DEFAULT_VERSION   dialect used when a caller names none (VCFv4.2)
    VCF_HEADER_LOG_LEVEL         logging level for the CLI and API (WARNING)
    VCF_HEADER_MAX_BATCH_LINES   cap on lines per batch request (10000)
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .exceptions import UnknownVersionError
from .versions import DEFAULT_VERSION, FormatVersion


class Settings(BaseModel):
    default_version: FormatVersion = DEFAULT_VERSION
    log_level: str = "WARNING"
    max_batch_lines: int = Field(10_000, ge=1)

    @field_validator("default_version", mode="before")
    @classmethod
    def _parse_version(cls, v):
        if isinstance(v, str):
            try:
                return FormatVersion.from_version_string(v)
            except UnknownVersionError as e:
                raise ValueError(e.message) from e
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{v}'")
        return level


def load_settings(dotenv: bool = True) -> Settings:
    """Build settings from ``VCF_HEADER_*`` environment variables."""
    if dotenv:
        load_dotenv()

    values: dict[str, str] = {}
    for field, env_name in (
        ("default_version", "VCF_HEADER_DEFAULT_VERSION"),
        ("log_level", "VCF_HEADER_LOG_LEVEL"),
        ("max_batch_lines", "VCF_HEADER_MAX_BATCH_LINES"),
    ):
        raw = os.environ.get(env_name)
        if raw:
            values[field] = raw
    return Settings(**values)
