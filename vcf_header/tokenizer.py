r"""
Tokenizer for bracketed header lines.

Turns ``<ID=X,Description="Some \"quoted\" text">`` into an ordered list of
``TagPair`` objects.  This is a single left-to-right scan, not a split on
commas: commas inside a quoted value belong to the value.

Grammar:
    <Line>     ::= "<" [ <Segment> ("," <Segment>)* ] ">"
    <Segment>  ::= WS* <Name> "=" <Value>
    <Value>    ::= <Quoted> WS* | <Unquoted>
    <Quoted>   ::= "\"" ( "\\\"" | "\\\\" | "\\" any | any-but-quote )* "\""
    <Unquoted> ::= any chars except ","

Quoted values decode ``\"`` and ``\\`` to a single character; any other
backslash pair is kept as written (``\n`` stays a backslash and an ``n``).
Unquoted values are kept verbatim, including any ``<`` or ``>``.
"""

from __future__ import annotations

from .exceptions import MalformedLineError, UnterminatedQuoteError
from .models import TagPair

_ESCAPABLE = ('"', "\\")


def tokenize(line: str) -> list[TagPair]:
    """Split a ``<...>`` header line into its tag/value pairs, in order.

    Raises:
        MalformedLineError: missing brackets, a segment without ``=``, a bad
            tag name, or stray text after a closing quote.
        UnterminatedQuoteError: a quoted value never closes.
    """
    if len(line) < 2 or not line.startswith("<") or not line.endswith(">"):
        raise MalformedLineError(
            f"Header line must be enclosed in '<' and '>': {line}",
            details={"line": line},
        )

    body = line[1:-1]
    if not body.strip():
        return []

    pairs: list[TagPair] = []
    pos = 0
    while True:
        pos = _skip_whitespace(body, pos)
        name, pos = _read_name(body, pos, line)

        if pos < len(body) and body[pos] == '"':
            value, pos = _read_quoted(body, pos + 1, line, name)
            pos = _expect_separator(body, pos, line, name)
        else:
            value, pos = _read_unquoted(body, pos)

        pairs.append(TagPair(name=name, value=value))

        if pos >= len(body):
            return pairs
        pos += 1  # past the comma


# ─── Scanners ───────────────────────────────────────────────────────


def _skip_whitespace(body: str, pos: int) -> int:
    while pos < len(body) and body[pos].isspace():
        pos += 1
    return pos


def _read_name(body: str, pos: int, line: str) -> tuple[str, int]:
    """Read up to the first ``=``; returns the trimmed name and the index after it."""
    end = pos
    while end < len(body) and body[end] not in "=,":
        end += 1

    if end >= len(body) or body[end] == ",":
        segment = body[pos:end]
        raise MalformedLineError(
            f"Missing '=' in header line segment '{segment}' of {line}",
            details={"line": line, "segment": segment, "position": pos + 1},
        )

    name = body[pos:end].strip()
    if not name or '"' in name:
        raise MalformedLineError(
            f"Invalid tag name '{name}' in header line {line}",
            details={"line": line, "tag": name, "position": pos + 1},
        )
    return name, end + 1


def _read_quoted(body: str, pos: int, line: str, name: str) -> tuple[str, int]:
    """Read a quoted value starting just after its opening quote."""
    value, end = _decode_until_quote(body, pos)
    if end is None:
        raise UnterminatedQuoteError(
            f"Unclosed quote in header line value {line}",
            details={"line": line, "tag": name},
        )
    return value, end


def _decode_until_quote(text: str, pos: int) -> tuple[str, int | None]:
    """Decode escapes until an unescaped quote.

    Returns the decoded text and the index after the closing quote, or
    ``None`` for the index when the text ran out first.
    """
    chars: list[str] = []
    while pos < len(text):
        char = text[pos]
        if char == "\\" and pos + 1 < len(text):
            following = text[pos + 1]
            if following in _ESCAPABLE:
                chars.append(following)
            else:
                chars.append(char)
                chars.append(following)
            pos += 2
        elif char == '"':
            return "".join(chars), pos + 1
        else:
            chars.append(char)
            pos += 1
    return "".join(chars), None


def _expect_separator(body: str, pos: int, line: str, name: str) -> int:
    """After a closing quote only whitespace may come before ``,`` or the end."""
    pos = _skip_whitespace(body, pos)
    if pos < len(body) and body[pos] != ",":
        raise MalformedLineError(
            f"Unexpected text after quoted value of tag {name} in header line {line}",
            details={"line": line, "tag": name, "position": pos + 1},
        )
    return pos


def _read_unquoted(body: str, pos: int) -> tuple[str, int]:
    end = body.find(",", pos)
    if end == -1:
        end = len(body)
    return body[pos:end], end
