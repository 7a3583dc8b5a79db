"""
VCF format dialects and the capabilities each one carries.

Callers gate behaviour on capability flags (``supports_optional_tag_validation``)
rather than on specific members, so adding a dialect means adding one row here.
"""

from __future__ import annotations

import re
from enum import Enum

from .exceptions import UnknownVersionError

_HEADER_VERSION_RE = re.compile(r"^##(?P<key>fileformat|format)=(?P<version>\S+)\s*$")


class FormatVersion(Enum):
    """A header-line dialect, identified by its ``##fileformat`` string."""

    # (version string, header key, supports optional-tag validation)
    VCF3_2 = ("VCRv3.2", "format", False)
    VCF3_3 = ("VCFv3.3", "fileformat", False)
    VCF4_0 = ("VCFv4.0", "fileformat", True)
    VCF4_1 = ("VCFv4.1", "fileformat", True)
    VCF4_2 = ("VCFv4.2", "fileformat", True)
    VCF4_3 = ("VCFv4.3", "fileformat", True)

    def __init__(self, version_string: str, format_key: str, supports_optional: bool):
        self.version_string = version_string
        self.format_key = format_key
        self.supports_optional_tag_validation = supports_optional

    def __str__(self) -> str:
        return self.version_string

    def to_header_line(self) -> str:
        """Return the ``##fileformat=...`` line declaring this version."""
        return f"##{self.format_key}={self.version_string}"

    @classmethod
    def from_version_string(cls, version_string: str) -> FormatVersion:
        """Look up a version by its string form, e.g. ``"VCFv4.2"``."""
        for member in cls:
            if member.version_string == version_string.strip():
                return member
        raise UnknownVersionError(
            f"Unknown VCF version '{version_string}'",
            details={"version": version_string},
        )

    @classmethod
    def from_header_line(cls, line: str) -> FormatVersion:
        """Parse a ``##fileformat=VCFv4.2`` (or VCF 3.2 ``##format=``) line."""
        match = _HEADER_VERSION_RE.match(line)
        if not match:
            raise UnknownVersionError(
                f"Not a file format header line: '{line.rstrip()}'",
                details={"line": line},
            )
        version = cls.from_version_string(match.group("version"))
        if version.format_key != match.group("key"):
            raise UnknownVersionError(
                f"Version {version} must be declared with ##{version.format_key}=",
                details={"line": line},
            )
        return version

    @classmethod
    def is_header_version_line(cls, line: str) -> bool:
        """Quick check whether a line declares a known file format version."""
        try:
            cls.from_header_line(line)
        except UnknownVersionError:
            return False
        return True


DEFAULT_VERSION = FormatVersion.VCF4_2
