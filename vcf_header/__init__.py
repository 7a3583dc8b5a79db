"""
VCF Header Translator: parsing for ``<TAG=value,...>`` header lines.

Architecture: Version Gate → Tokenizer → Tag Sequence Validator → ordered mapping
Philosophy:  Prove syntax and tag order. Leave value semantics to the caller.
"""

from .exceptions import ErrorKind, InvalidHeaderError
from .models import LineReport, TagContract, TagPair
from .serializer import format_header_line
from .tokenizer import tokenize
from .translator import HeaderLineTranslator, parse_line
from .versions import FormatVersion

__version__ = "1.0.0"

__all__ = [
    "ErrorKind",
    "FormatVersion",
    "HeaderLineTranslator",
    "InvalidHeaderError",
    "LineReport",
    "TagContract",
    "TagPair",
    "format_header_line",
    "parse_line",
    "tokenize",
]
