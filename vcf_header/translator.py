"""
Header line translation: the entry point.

Flow:
  ┌──────────────┐
  │ Version Gate │   ← only when optional tags are supplied
  └──────┬───────┘
  ┌──────▼───────┐
  │  Tokenizer   │   ← "<...>" → ordered TagPairs
  └──────┬───────┘
  ┌──────▼───────┐
  │  Validator   │   ← count cap, required order, optional membership
  └──────┬───────┘
  ┌──────▼───────┐
  │   Mapping    │   ← dict[str, str], input order
  └──────────────┘

Every stage is pure.  The first failure raises; nothing partial is returned.
``HeaderLineTranslator.check_line`` is the non-raising variant that folds the
failure into a ``LineReport``.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Sequence

from .config import Settings
from .exceptions import InvalidHeaderError
from .models import LineReport, ParseFinding, TagContract
from .tokenizer import tokenize
from .validators import check_version_supports_optional_tags, validate_tag_sequence
from .versions import FormatVersion

logger = logging.getLogger(__name__)


def parse_line(
    version: FormatVersion,
    line: str,
    required: Sequence[str] | None = None,
    optional: Collection[str] | None = None,
) -> dict[str, str]:
    """Parse one ``<TAG=value,...>`` line into an ordered mapping.

    Args:
        version: Dialect of the file the line came from.
        line: The bracketed line, e.g. ``<ID=DP,Description="Depth">``.
        required: Tags that, when present, must appear in this order.
        optional: Tags allowed after the required ones.  Supplying any turns
            on the version gate and the tag-count cap.

    Returns:
        Every tag on the line mapped to its decoded value, in line order.

    Raises:
        InvalidHeaderError: on the first violation found.
    """
    optional_provided = bool(optional)
    check_version_supports_optional_tags(version, optional_provided)

    pairs = tokenize(line)
    logger.debug("Tokenized %d tag(s) from %s", len(pairs), line)

    validate_tag_sequence(pairs, required, optional if optional_provided else None, line)

    return {pair.name: pair.value for pair in pairs}


class HeaderLineTranslator:
    """Parses header lines with a configured default dialect.

    Usage:
        translator = HeaderLineTranslator()
        values = translator.parse('<ID=DP,Description="Depth">',
                                  TagContract(required=["ID", "Description"]))
        report = translator.check_line("<ID=DP,Oops>")
        if not report.is_valid:
            print(report.finding.message)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    def resolve_version(self, version: FormatVersion | str | None) -> FormatVersion:
        if version is None:
            return self.settings.default_version
        if isinstance(version, str):
            return FormatVersion.from_version_string(version)
        return version

    def parse(
        self,
        line: str,
        contract: TagContract | None = None,
        version: FormatVersion | str | None = None,
    ) -> dict[str, str]:
        """Parse ``line`` against an optional contract; raises on failure."""
        contract = contract or TagContract()
        return parse_line(
            self.resolve_version(version), line, contract.required, contract.optional
        )

    def check_line(
        self,
        line: str,
        contract: TagContract | None = None,
        version: FormatVersion | str | None = None,
    ) -> LineReport:
        """Like ``parse`` but returns a report instead of raising.

        An unknown version string is reported the same way as a bad line.
        """
        resolved = None
        try:
            resolved = self.resolve_version(version)
            values = self.parse(line, contract, resolved)
        except InvalidHeaderError as e:
            logger.info("Rejected header line [%s]: %s", e.code.value, e.message)
            return LineReport(
                line=line,
                version=str(resolved or version),
                is_valid=False,
                finding=ParseFinding(
                    code=e.code,
                    message=e.message,
                    tag=e.details.get("tag"),
                    details={k: v for k, v in e.details.items() if k != "line"},
                ),
            )

        return LineReport(line=line, version=str(resolved), is_valid=True, values=values)

    def check_lines(
        self,
        lines: Iterable[str],
        contract: TagContract | None = None,
        version: FormatVersion | str | None = None,
    ) -> list[LineReport]:
        """Check each line independently; one bad line does not stop the rest."""
        reports = [self.check_line(line, contract, version) for line in lines]
        rejected = sum(1 for r in reports if not r.is_valid)
        logger.debug("Checked %d line(s), %d rejected", len(reports), rejected)
        return reports
