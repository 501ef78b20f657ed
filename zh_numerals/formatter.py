"""
Render integers as Chinese numeral text.

    format_number(10086)             → "一万零八十六"
    format_number(10086, FINANCIAL)  → "壹万零捌拾陆"
    format_number(10 ** 16)          → "一亿亿"

The renderer mirrors the parser's grouping: a number is split at 10^8 (or
10^4) into a high and a low half, each rendered recursively with the
magnitude glyph between them. Halves above 10^8 split again, which is how
亿亿 (10^16) and beyond come out.

Zeros are the only subtle part. Inside a number, any run of zero digits is
written as a single 零, and only if a nonzero digit follows it. That run can
straddle a magnitude boundary (一亿零一 = 100000001), so one Spacing cell is
shared by every recursive call of a single format call:

    START        nothing written yet; leading zeros are ignored
    GAP_PENDING  a zero was skipped; write 零 before the next digit
    EMITTED      last thing written was a digit (and its magnitude)
"""

from __future__ import annotations

import io
from enum import Enum
from typing import TextIO

from .glyphs import STANDARD, GlyphSet


class Spacing(Enum):
    START = "start"
    GAP_PENDING = "gap_pending"
    EMITTED = "emitted"


class SpacingCell:
    """Mutable holder for the Spacing state of one format call."""

    __slots__ = ("state",)

    def __init__(self) -> None:
        self.state = Spacing.START


# ─── Public API ──────────────────────────────────────────────────────


def format_number(value: int, glyphs: GlyphSet = STANDARD) -> str:
    """Render a non-negative integer as Chinese numerals.

    Raises:
        TypeError: If `value` is not an int.
        ValueError: If `value` is negative.
    """
    out = io.StringIO()
    write_number(value, out, glyphs)
    return out.getvalue()


def write_number(value: int, sink: TextIO, glyphs: GlyphSet = STANDARD) -> None:
    """Stream the rendering of `value` into `sink` piece by piece.

    Errors raised by `sink.write` propagate unchanged.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Negative numbers cannot be written: {value}")

    if value == 0:
        sink.write(glyphs.zero)
        return
    render(value, sink, glyphs, SpacingCell())


# ─── Renderer ────────────────────────────────────────────────────────


def render(value: int, sink: TextIO, glyphs: GlyphSet, cell: SpacingCell) -> None:
    """Dispatch on magnitude. A zero value writes nothing."""
    if value < 10_000:
        render_group(value, sink, glyphs, cell)
    elif value < 100_000_000:
        render_chain(value, 10_000, glyphs.ten_thousand, sink, glyphs, cell)
    else:
        render_chain(value, 100_000_000, glyphs.hundred_million, sink, glyphs, cell)


def render_chain(
    value: int,
    power: int,
    power_glyph: str,
    sink: TextIO,
    glyphs: GlyphSet,
    cell: SpacingCell,
) -> None:
    high, low = divmod(value, power)
    render(high, sink, glyphs, cell)
    sink.write(power_glyph)
    render(low, sink, glyphs, cell)


def render_group(value: int, sink: TextIO, glyphs: GlyphSet, cell: SpacingCell) -> None:
    """Render 0 <= value < 10000 (one 4-digit group)."""
    if not 0 <= value < 10_000:
        raise ValueError(f"A 4-digit group must be in [0, 10000), got {value}")

    magnitudes = glyphs.group_magnitudes
    for position in (3, 2, 1, 0):
        digit = value // 10 ** position % 10
        if digit == 0:
            if cell.state is not Spacing.START:
                cell.state = Spacing.GAP_PENDING
            continue

        if cell.state is Spacing.GAP_PENDING:
            sink.write(glyphs.zero)
        # 十二 rather than 一十二, only as the first token written
        leading_ten = cell.state is Spacing.START and digit == 1 and position == 1
        if not (leading_ten and glyphs.elide_leading_one):
            sink.write(glyphs.digits[digit])
        magnitude = magnitudes[position]
        if magnitude is not None:
            sink.write(magnitude)
        cell.state = Spacing.EMITTED
