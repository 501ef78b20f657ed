"""
Pydantic models for line conversion — options in, per-line results out.

The numeral core itself works on plain ints and strings; these models are
the typed boundary for the converter, the CLI and the HTTP API.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .glyphs import GlyphStyle


# ─── Conversion Mode ────────────────────────────────────────────────


class ConversionMode(str, Enum):
    """Which way a line is converted."""

    PARSE = "parse"  # Chinese numerals → ASCII digits
    HARD = "hard"  # Chinese numerals read digit by digit → ASCII digits
    FORMAT = "format"  # ASCII digits → Chinese numerals


# ─── Options ────────────────────────────────────────────────────────


class ConversionOptions(BaseModel):
    """How each line is converted."""

    mode: ConversionMode = ConversionMode.PARSE
    style: Optional[GlyphStyle] = None  # FORMAT mode only; None means the configured default
    keep_rest: bool = False  # Keep skipped prefix and trailing text in the output
    skip_chars: int = Field(default=0, ge=0)  # Characters to skip before the number


# ─── Per-Line Results ───────────────────────────────────────────────


class LineIssue(BaseModel):
    """Why a line produced no number."""

    line_number: int
    column: int  # 1-based, counted in the original line
    message: str
    expected: list[str] = Field(default_factory=list)


class LineResult(BaseModel):
    """One converted line, split into the pieces the output is built from."""

    line_number: int
    prefix: str = ""  # Skipped leading characters
    target: str = ""  # The text the number was read from (prefix and EOL removed)
    converted: Optional[str] = None  # Rendered number, None on failure
    rest: str = ""  # Text after the number
    eol: str = ""  # "\r\n", "\n" or ""
    output: str = ""
    issue: Optional[LineIssue] = None
