"""Serialize a tag mapping back into a ``<TAG=value,...>`` header line."""

from __future__ import annotations

from collections.abc import Collection, Mapping

# Tags whose values are always written quoted, whatever they contain.
DEFAULT_QUOTED_TAGS: frozenset[str] = frozenset({"Description", "Source", "Version"})

_NEEDS_QUOTES = (" ", ",", "\t", '"', "<", ">", "=")
_INVALID_NAME_CHARS = ("=", ",", '"', "<", ">")


def format_header_line(
    values: Mapping[str, object],
    quoted_tags: Collection[str] = DEFAULT_QUOTED_TAGS,
) -> str:
    """Build ``<k1=v1,k2="v 2">`` from an ordered mapping.

    Quoted values have ``\\`` and ``"`` backslash-escaped, so the tokenizer
    reads back exactly the values given here.
    """
    parts = []
    for name, raw_value in values.items():
        _check_tag_name(name)
        value = "" if raw_value is None else str(raw_value)
        if name in quoted_tags or any(char in value for char in _NEEDS_QUOTES):
            value = quote_value(value)
        parts.append(f"{name}={value}")
    return f"<{','.join(parts)}>"


def quote_value(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _check_tag_name(name: str) -> None:
    if not name or any(c in name for c in _INVALID_NAME_CHARS) or any(c.isspace() for c in name):
        raise ValueError(f"Invalid tag name for a header line: '{name}'")
