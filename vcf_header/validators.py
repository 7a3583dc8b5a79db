"""
Tag sequence validation and the version gate.

These checks run on tokens that the tokenizer already produced.  They prove
the ORDER and MEMBERSHIP of tags that are present.  They do not prove that
every required tag is present: a required tag missing from the end of a line
is accepted.

Each check raises an ``InvalidHeaderError`` subclass on the first violation
and returns ``None`` otherwise.  ``classify_tag`` is the pure decision at the
heart of the scan and can be tested without any tokens at all.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from .exceptions import (
    OptionalTagOrderError,
    TagCountError,
    TagOrderError,
    UnexpectedTagError,
    UnsupportedVersionError,
)
from .models import TagPair, TagVerdict
from .versions import FormatVersion


# ─── Version Gate ───────────────────────────────────────────────────


def check_version_supports_optional_tags(
    version: FormatVersion, optional_tags_provided: bool
) -> None:
    """Reject optional-tag validation for dialects that cannot do it.

    Unconditional: the line is never looked at.
    """
    if optional_tags_provided and not version.supports_optional_tag_validation:
        raise UnsupportedVersionError(
            f"Optional tags are not supported in VCF version {version}",
            details={"version": str(version)},
        )


# ─── Orchestrator ───────────────────────────────────────────────────


def validate_tag_sequence(
    pairs: Sequence[TagPair],
    required: Sequence[str] | None = None,
    optional: Collection[str] | None = None,
    line: str | None = None,
) -> None:
    """Check ``pairs`` against a required order and an optional set.

    With neither a required order nor optional tags this is a no-op.  When
    optional tags are given the tag count is capped first.
    """
    required = list(required or ())
    optional_set = frozenset(optional or ())
    if not required and not optional_set:
        return

    if optional_set:
        check_tag_count(pairs, required, optional_set, line)

    cursor = 0
    for position, pair in enumerate(pairs):
        verdict = classify_tag(pair.name, cursor, required, optional_set)
        if verdict == TagVerdict.REQUIRED_MATCH:
            cursor += 1
        elif not verdict.accepted:
            _raise_for_verdict(verdict, pair.name, position, required, line)


def check_tag_count(
    pairs: Sequence[TagPair],
    required: Sequence[str],
    optional: Collection[str],
    line: str | None = None,
) -> None:
    """A line may hold at most one tag per required and optional name."""
    allowed = len(required) + len(optional)
    if len(pairs) > allowed:
        raise TagCountError(
            f"Unexpected tag count {len(pairs)}{_where(line)}",
            details={"count": len(pairs), "allowed": allowed, "line": line},
        )


# ─── Single-tag decision ────────────────────────────────────────────


def classify_tag(
    name: str,
    cursor: int,
    required: Sequence[str],
    optional: Collection[str] = frozenset(),
) -> TagVerdict:
    """Decide what a tag means given the next expected required position.

    Args:
        name: The tag found on the line.
        cursor: Index into ``required`` of the next tag expected.
        required: The required tags, in order.
        optional: The optional tags (membership only).
    """
    if cursor < len(required):
        if name == required[cursor]:
            return TagVerdict.REQUIRED_MATCH
        if name in required:
            return TagVerdict.WRONG_ORDER
        if name in optional:
            return TagVerdict.OPTIONAL_TOO_EARLY
        return TagVerdict.UNEXPECTED

    if name in optional:
        return TagVerdict.OPTIONAL_MATCH
    return TagVerdict.UNEXPECTED


def _raise_for_verdict(
    verdict: TagVerdict,
    name: str,
    position: int,
    required: Sequence[str],
    line: str | None,
) -> None:
    details = {"tag": name, "position": position + 1, "line": line}

    if verdict == TagVerdict.WRONG_ORDER:
        expected = required.index(name) + 1
        raise TagOrderError(
            f"Tag {name} in wrong order (was #{position + 1}, expected #{expected})"
            f"{_where(line)}",
            details={**details, "expected_position": expected},
        )
    if verdict == TagVerdict.OPTIONAL_TOO_EARLY:
        raise OptionalTagOrderError(
            f"Optional tag {name} must be listed after all expected tags{_where(line)}",
            details=details,
        )
    raise UnexpectedTagError(f"Unexpected tag {name}{_where(line)}", details=details)


def _where(line: str | None) -> str:
    return f" in header line {line}" if line else ""
