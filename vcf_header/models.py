"""
Pydantic models for header line parsing.

The hot path returns a plain ``dict[str, str]``; these models describe the
pieces around it: the tokens, the caller's tag contract, the outcome of
classifying a single tag, and the non-raising report form.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ErrorKind


# ─── Tokens ─────────────────────────────────────────────────────────


class TagPair(BaseModel):
    """One ``name=value`` segment of a header line, value already decoded."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


# ─── Contract ───────────────────────────────────────────────────────


class TagContract(BaseModel):
    """The tags a caller expects on a line.

    ``required`` is ordered: tags that are present must follow it left to
    right.  ``optional`` is membership-only and may only follow the required
    tags.  An empty ``optional`` behaves exactly like ``None``.
    """

    required: list[str] = Field(default_factory=list)
    optional: Optional[list[str]] = None


class TagVerdict(str, Enum):
    """Outcome of checking one tag against the contract."""

    REQUIRED_MATCH = "REQUIRED_MATCH"
    OPTIONAL_MATCH = "OPTIONAL_MATCH"
    WRONG_ORDER = "WRONG_ORDER"
    OPTIONAL_TOO_EARLY = "OPTIONAL_TOO_EARLY"
    UNEXPECTED = "UNEXPECTED"

    @property
    def accepted(self) -> bool:
        return self in (TagVerdict.REQUIRED_MATCH, TagVerdict.OPTIONAL_MATCH)


# ─── Reports ────────────────────────────────────────────────────────


class ParseFinding(BaseModel):
    """Why a line was rejected."""

    code: ErrorKind
    message: str
    tag: Optional[str] = None  # Offending tag name, when there is one
    details: dict = Field(default_factory=dict)


class LineReport(BaseModel):
    """Result of checking a single line without raising."""

    line: str
    version: str
    is_valid: bool
    values: dict[str, str] = Field(default_factory=dict)
    finding: Optional[ParseFinding] = None
