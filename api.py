"""
VCF Header Translator: FastAPI Server
======================================

HTTP access to the header line parser.

Endpoints:
    POST /parse             Parse one header line against an optional contract
    POST /parse/batch       Parse many lines with the same contract
    POST /format            Serialize a tag mapping into a header line
    GET  /versions          Known VCF dialects and their capabilities
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from vcf_header import __version__
from vcf_header.config import load_settings
from vcf_header.exceptions import ErrorKind, UnknownVersionError
from vcf_header.models import LineReport, TagContract
from vcf_header.serializer import format_header_line
from vcf_header.translator import HeaderLineTranslator
from vcf_header.versions import FormatVersion

logger = logging.getLogger(__name__)


# ─── Application Lifespan ───────────────────────────────────────────

_translator: HeaderLineTranslator | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings and build the translator on startup."""
    global _translator  # noqa: PLW0603
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    _translator = HeaderLineTranslator(settings)
    logger.info("Translator ready (default version %s)", settings.default_version)
    yield
    _translator = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="VCF Header Translator API",
    description=(
        "Parses bracketed VCF header lines (<ID=...,Description=\"...\">) into "
        "ordered tag mappings and checks tag order against a caller contract."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class ContractFields(BaseModel):
    version: Optional[str] = Field(
        None, description="Dialect, e.g. 'VCFv4.2'. Defaults to the server setting."
    )
    required_tags: list[str] = Field(
        default_factory=list, description="Tags that must appear in this order when present."
    )
    optional_tags: Optional[list[str]] = Field(
        None, description="Tags allowed after the required ones. Enables the count cap."
    )

    def contract(self) -> TagContract:
        return TagContract(required=self.required_tags, optional=self.optional_tags)


class ParseRequest(ContractFields):
    line: str = Field(
        ...,
        json_schema_extra={"example": '<ID=SnpCluster,Description="SNPs found in clusters">'},
    )


class BatchParseRequest(ContractFields):
    lines: list[str] = Field(..., min_length=1)


class ErrorOut(BaseModel):
    code: ErrorKind
    message: str
    tag: Optional[str] = None
    details: dict = Field(default_factory=dict)


class ParseResponse(BaseModel):
    is_valid: bool
    version: str
    values: dict[str, str] = Field(default_factory=dict)
    error: Optional[ErrorOut] = None

    model_config = {"json_schema_extra": {"example": {
        "is_valid": False,
        "version": "VCFv4.2",
        "values": {},
        "error": {
            "code": "TAG_WRONG_ORDER",
            "message": "Tag ID in wrong order (was #1, expected #2)",
            "tag": "ID",
            "details": {"position": 1, "expected_position": 2},
        },
    }}}


class BatchParseResponse(BaseModel):
    valid_count: int
    invalid_count: int
    results: list[ParseResponse]


class FormatRequest(BaseModel):
    values: dict[str, str] = Field(..., json_schema_extra={"example": {"ID": "DP", "Description": "Read depth"}})


class FormatResponse(BaseModel):
    line: str


class VersionOut(BaseModel):
    version: str
    header_line: str
    supports_optional_tag_validation: bool


class HealthResponse(BaseModel):
    status: str
    version: str
    default_version: str


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_translator() -> HeaderLineTranslator:
    if _translator is None:
        raise HTTPException(status_code=503, detail="Translator not initialised")
    return _translator


def _resolve_version(translator: HeaderLineTranslator, version: str | None) -> FormatVersion:
    try:
        return translator.resolve_version(version)
    except UnknownVersionError as e:
        raise HTTPException(status_code=422, detail=e.message)


def _build_response(report: LineReport) -> ParseResponse:
    """Convert the internal LineReport to the API response schema."""
    error = (
        ErrorOut.model_validate(report.finding, from_attributes=True)
        if report.finding
        else None
    )
    return ParseResponse(
        is_valid=report.is_valid,
        version=report.version,
        values=report.values,
        error=error,
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/parse",
    summary="Parse a single header line",
    tags=["Parsing"],
    responses={422: {"description": "Unknown version"}, 503: {"description": "Not ready"}},
)
def parse(request: ParseRequest) -> ParseResponse:
    """Parse one line. Parse failures come back as `is_valid: false` with an `error`."""
    translator = _get_translator()
    version = _resolve_version(translator, request.version)
    report = translator.check_line(request.line, request.contract(), version)
    return _build_response(report)


@app.post(
    "/parse/batch",
    summary="Parse many header lines with one contract",
    tags=["Parsing"],
    responses={
        413: {"description": "Too many lines"},
        422: {"description": "Unknown version"},
        503: {"description": "Not ready"},
    },
)
async def parse_batch(request: BatchParseRequest) -> BatchParseResponse:
    translator = _get_translator()
    if len(request.lines) > translator.settings.max_batch_lines:
        raise HTTPException(
            status_code=413,
            detail=f"Too many lines (max {translator.settings.max_batch_lines})",
        )
    version = _resolve_version(translator, request.version)

    reports = await asyncio.to_thread(
        translator.check_lines, request.lines, request.contract(), version
    )
    results = [_build_response(r) for r in reports]
    valid = sum(1 for r in results if r.is_valid)
    return BatchParseResponse(
        valid_count=valid,
        invalid_count=len(results) - valid,
        results=results,
    )


@app.post(
    "/format",
    summary="Serialize tags into a header line",
    tags=["Formatting"],
    responses={422: {"description": "Invalid tag name"}},
)
def format_line(request: FormatRequest) -> FormatResponse:
    try:
        line = format_header_line(request.values)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return FormatResponse(line=line)


@app.get("/versions", summary="Known VCF dialects", tags=["System"])
def list_versions() -> list[VersionOut]:
    return [
        VersionOut(
            version=v.version_string,
            header_line=v.to_header_line(),
            supports_optional_tag_validation=v.supports_optional_tag_validation,
        )
        for v in FormatVersion
    ]


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Not ready"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    translator = _get_translator()
    return HealthResponse(
        status="healthy",
        version=__version__,
        default_version=str(translator.settings.default_version),
    )
