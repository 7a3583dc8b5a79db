#!/usr/bin/env python3
"""
VCF Header Translator: Entry Point
===================================

Parses bracketed header lines and prints a report for each one.

Usage:
    python main.py                # Built-in sample lines
    python main.py header.vcf     # Every ##KEY=<...> line of a VCF header

The dialect comes from the file's ##fileformat line when there is one,
otherwise from VCF_HEADER_DEFAULT_VERSION (default VCFv4.2).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from vcf_header.config import load_settings
from vcf_header.models import LineReport, TagContract
from vcf_header.translator import HeaderLineTranslator
from vcf_header.versions import FormatVersion

logger = logging.getLogger(__name__)


# ─── Sample Lines: Some Broken on Purpose ──────────────────────────

SAMPLE_LINES = [
    '<ID=SnpCluster,Description="SNPs found in clusters">',
    '<ID=ANNOTATION,Description="ANNOTATION != \\"NA\\" || ANNOTATION <= 0.01">',
    '<ID=ANNOTATION,Description="ANNOTATION \\n with a newline in it>',
    '<Description="Read depth",ID=DP>',
    '<ID=X,Description="Y",Extra=E>',
]

SAMPLE_CONTRACT = TagContract(required=["ID", "Description"], optional=["Source", "Version"])


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Input Helpers ──────────────────────────────────────────────────


def _bracketed_part(line: str) -> str | None:
    """'##INFO=<ID=DP,...>' → '<ID=DP,...>'; bare '<...>' lines pass through."""
    line = line.rstrip("\r\n")
    if line.startswith("<"):
        return line
    if line.startswith("##") and "=<" in line:
        return line[line.index("=<") + 1:]
    return None


def _read_header_file(path: Path) -> tuple[FormatVersion | None, list[str]]:
    version = None
    lines = []
    with path.open(encoding="utf-8") as f:
        for raw in f:
            if raw.startswith("#CHROM") or not raw.startswith(("#", "<")):
                break
            if raw.startswith(("##fileformat=", "##format=")):
                if version is None and FormatVersion.is_header_version_line(raw):
                    version = FormatVersion.from_header_line(raw)
                elif version is None:
                    logger.warning("Unrecognised file format line %s; using the default version", raw.strip())
                continue
            bracketed = _bracketed_part(raw)
            if bracketed is not None:
                lines.append(bracketed)
    return version, lines


# ─── Pretty Printer ─────────────────────────────────────────────────


def _print_line_report(report: LineReport) -> None:
    if report.is_valid:
        print(f"  {_GREEN}OK{_RESET}   {report.line}")
        for name, value in report.values.items():
            print(f"         {_DIM}{name}:{_RESET} {value}")
        return

    print(f"  {_RED}FAIL{_RESET} {report.line}")
    if report.finding:
        print(f"         {_RED}[{report.finding.code.value}]{_RESET} {report.finding.message}")


def print_reports(reports: list[LineReport], version: FormatVersion) -> int:
    """Pretty-print line reports.

    Returns:
        0 if every line parsed, 1 otherwise.
    """
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  HEADER LINE REPORT{_RESET}")
    print(f"{'=' * _WIDTH}")
    print(f"  Version:     {version}")
    print(f"  Lines:       {len(reports)}")
    print(f"{'─' * _WIDTH}")

    for report in reports:
        _print_line_report(report)

    rejected = [r for r in reports if not r.is_valid]
    print(f"{'=' * _WIDTH}")
    if not rejected:
        print(f"  {_GREEN}{_BOLD}ALL LINES PARSED{_RESET}")
    else:
        print(f"  {_RED}{_BOLD}{len(rejected)} LINE(S) REJECTED{_RESET}")
    print(f"{'=' * _WIDTH}\n")

    return 0 if not rejected else 1


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Parse the sample lines, or the header of the file named on the command line."""
    argv = sys.argv[1:] if argv is None else argv
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    translator = HeaderLineTranslator(settings)

    if argv:
        file_version, lines = _read_header_file(Path(argv[0]))
        version = file_version or settings.default_version
        reports = translator.check_lines(lines, version=version)
    else:
        version = settings.default_version
        reports = translator.check_lines(SAMPLE_LINES, SAMPLE_CONTRACT, version)

    return print_reports(reports, version)


if __name__ == "__main__":
    sys.exit(main())
