"""
Exception hierarchy for header line parsing.

Every failure is an ``InvalidHeaderError``.  The subclass (and its ``code``)
names the category, so callers can branch on the kind instead of sniffing
message text.  The messages still carry the classic phrasings
("Unexpected tag count 3", "Tag ID in wrong order", ...) because downstream
tools grep for them.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable category of a header line failure."""

    UNSUPPORTED_OPTIONAL_TAGS = "UNSUPPORTED_OPTIONAL_TAGS"
    MALFORMED_LINE = "MALFORMED_LINE"
    UNTERMINATED_QUOTE = "UNTERMINATED_QUOTE"
    UNEXPECTED_TAG_COUNT = "UNEXPECTED_TAG_COUNT"
    TAG_WRONG_ORDER = "TAG_WRONG_ORDER"
    OPTIONAL_TAG_TOO_EARLY = "OPTIONAL_TAG_TOO_EARLY"
    UNEXPECTED_TAG = "UNEXPECTED_TAG"
    UNKNOWN_VERSION = "UNKNOWN_VERSION"


class InvalidHeaderError(Exception):
    """Base exception for all header line failures."""

    def __init__(self, code: ErrorKind, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnsupportedVersionError(InvalidHeaderError):
    """Optional-tag validation was requested for a dialect that lacks it."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.UNSUPPORTED_OPTIONAL_TAGS, message, details)


class MalformedLineError(InvalidHeaderError):
    """The line is not a well-formed ``<TAG=value,...>`` record."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.MALFORMED_LINE, message, details)


class UnterminatedQuoteError(InvalidHeaderError):
    """A quoted value ran to the end of the line without a closing quote."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.UNTERMINATED_QUOTE, message, details)


class TagCountError(InvalidHeaderError):
    """More tags than the required and optional sets together allow."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.UNEXPECTED_TAG_COUNT, message, details)


class TagOrderError(InvalidHeaderError):
    """A required tag appeared out of its declared position."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.TAG_WRONG_ORDER, message, details)


class OptionalTagOrderError(InvalidHeaderError):
    """An optional tag appeared before every required tag was seen."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.OPTIONAL_TAG_TOO_EARLY, message, details)


class UnexpectedTagError(InvalidHeaderError):
    """A tag that is neither required nor optional."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.UNEXPECTED_TAG, message, details)


class UnknownVersionError(InvalidHeaderError):
    """A version string or ``##fileformat`` line names no known dialect."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorKind.UNKNOWN_VERSION, message, details)
