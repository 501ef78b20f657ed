"""
zh-num — FastAPI Server
=======================

HTTP API for converting between integers and Chinese numerals.

Endpoints:
    POST /parse             Read a numeral from the front of some text
    POST /format            Render an integer as Chinese numerals
    POST /convert           Convert multi-line text, line by line
    GET  /health            Health check / readiness check

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import io
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from zh_numerals import __version__
from zh_numerals.config import Settings, load_settings
from zh_numerals.converter import LineConverter
from zh_numerals.exceptions import NumeralParseError
from zh_numerals.formatter import format_number
from zh_numerals.glyphs import GlyphStyle, glyph_set
from zh_numerals.models import ConversionOptions, LineResult
from zh_numerals.parser import parse_hard_number, parse_number

logger = logging.getLogger(__name__)


# ─── Application Lifespan (load settings) ───────────────────────────

_settings: Settings | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings from the environment (and .env) on startup."""
    global _settings  # noqa: PLW0603
    _settings = load_settings()
    logger.info("zh-num API ready (default style: %s)", _settings.style.value)
    yield
    _settings = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="zh-num API",
    description=(
        "Convert between integers and Chinese numerals. Reads zero-elided "
        "forms, financial and traditional glyph variants, and digit-by-digit "
        "codes; writes standard or financial numerals."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class ParseRequest(BaseModel):
    """Request body for the /parse endpoint."""

    text: str = Field(
        ...,
        min_length=1,
        description="Text starting with a numeral. Anything after the numeral is returned as `rest`.",
        json_schema_extra={"example": "一万零十三章"},
    )
    hard: bool = Field(default=False, description="Read every glyph as one decimal digit.")


class ParseErrorOut(BaseModel):
    offset: int = Field(description="0-based character offset the parser stopped at")
    expected: list[str]
    message: str


class ParseResponse(BaseModel):
    """Outcome of a parse. A failed parse is a normal response, not an HTTP error."""

    ok: bool
    value: Optional[int] = None
    rest: str = ""
    error: Optional[ParseErrorOut] = None

    model_config = {"json_schema_extra": {"example": {
        "ok": True,
        "value": 10013,
        "rest": "章",
        "error": None,
    }}}


class FormatRequest(BaseModel):
    """Request body for the /format endpoint."""

    value: int = Field(..., ge=0, json_schema_extra={"example": 10086})
    style: Optional[GlyphStyle] = Field(
        default=None, description="Glyph set; the server default when omitted."
    )


class FormatResponse(BaseModel):
    value: int
    style: GlyphStyle
    text: str


class ConvertRequest(BaseModel):
    """Request body for the /convert endpoint."""

    text: str = Field(..., description="One or more lines; line endings are preserved.")
    options: ConversionOptions = Field(default_factory=ConversionOptions)


class ConvertResponse(BaseModel):
    output: str
    failed_lines: int
    lines: list[LineResult]


class HealthResponse(BaseModel):
    status: str
    version: str
    default_style: GlyphStyle


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_settings() -> Settings:
    if _settings is None:
        raise HTTPException(status_code=503, detail="Service not initialised")
    return _settings


def _check_size(text: str, settings: Settings) -> None:
    if len(text) > settings.max_input:
        raise HTTPException(
            status_code=413,
            detail=f"Text too long (max {settings.max_input} characters)",
        )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/parse",
    summary="Read a numeral from the front of some text",
    tags=["Conversion"],
    responses={
        413: {"description": "Text longer than the configured maximum"},
        503: {"description": "Service not yet initialised"},
    },
)
def parse_text(request: ParseRequest) -> ParseResponse:
    """Parse Chinese numerals (or ASCII digits) at the start of `text`.

    - **value**: the parsed integer
    - **rest**: the text after the numeral, untouched
    - **error**: where parsing stopped and what it expected, when `ok` is false
    """
    _check_size(request.text, _get_settings())
    parse = parse_hard_number if request.hard else parse_number
    try:
        value, rest = parse(request.text)
    except NumeralParseError as e:
        return ParseResponse(
            ok=False,
            rest=request.text,
            error=ParseErrorOut(offset=e.offset, expected=e.expected, message=str(e)),
        )
    return ParseResponse(ok=True, value=value, rest=rest)


@app.post(
    "/format",
    summary="Render an integer as Chinese numerals",
    tags=["Conversion"],
    responses={503: {"description": "Service not yet initialised"}},
)
def format_value(request: FormatRequest) -> FormatResponse:
    """Write `value` with the standard (小写) or financial (大写) glyph set."""
    style = request.style or _get_settings().style
    return FormatResponse(
        value=request.value,
        style=style,
        text=format_number(request.value, glyph_set(style)),
    )


@app.post(
    "/convert",
    summary="Convert text line by line",
    tags=["Conversion"],
    responses={
        413: {"description": "Text longer than the configured maximum"},
        503: {"description": "Service not yet initialised"},
    },
)
def convert_text(request: ConvertRequest) -> ConvertResponse:
    """Run every line of `text` through the line converter.

    Lines that hold no number are reported in `lines[].issue`; they do not
    fail the request.
    """
    settings = _get_settings()
    _check_size(request.text, settings)
    options = request.options
    if options.style is None:
        options = options.model_copy(update={"style": settings.style})
    converter = LineConverter(options)
    # Lines end at "\n" only, as on the command line
    results = list(converter.run(io.StringIO(request.text, newline="\n")))
    return ConvertResponse(
        output="".join(r.output for r in results),
        failed_lines=sum(1 for r in results if r.issue is not None),
        lines=results,
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Service not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    settings = _get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        default_style=settings.style,
    )
