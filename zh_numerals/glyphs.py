"""
Glyph tables for Chinese numerals.

Two kinds of data live here:

  * GlyphSet — what the formatter WRITES. One canonical glyph per digit and
    per magnitude. Two instances ship: STANDARD (小写) and FINANCIAL (大写,
    the anti-fraud forms used on cheques and invoices).
  * Synonym tables — what the parser READS. Every glyph either set can
    write, plus traditional and historical variants. Parsing never needs to
    know which set produced the text.

Adding a glyph set means adding an instance, not touching the algorithms.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ─── Glyph Sets ──────────────────────────────────────────────────────


class GlyphStyle(str, Enum):
    """Which glyph set the formatter writes with."""

    STANDARD = "standard"
    FINANCIAL = "financial"


@dataclass(frozen=True)
class GlyphSet:
    """Immutable table of output glyphs.

    `elide_leading_one` controls whether a number that starts with a single
    ten is written as 十 (standard) or 壹拾 (financial).
    """

    name: str
    digits: str  # index == digit value
    ten: str
    hundred: str
    thousand: str
    ten_thousand: str
    hundred_million: str
    elide_leading_one: bool = True

    def __post_init__(self):
        if len(self.digits) != 10:
            raise ValueError(f"Glyph set {self.name!r} needs 10 digits, got {len(self.digits)}")

    @property
    def zero(self) -> str:
        return self.digits[0]

    @property
    def group_magnitudes(self) -> tuple[str | None, str, str, str]:
        """Magnitude glyphs inside a 4-digit group, units first."""
        return (None, self.ten, self.hundred, self.thousand)


STANDARD = GlyphSet(
    name=GlyphStyle.STANDARD.value,
    digits="零一二三四五六七八九",
    ten="十",
    hundred="百",
    thousand="千",
    ten_thousand="万",
    hundred_million="亿",
)

FINANCIAL = GlyphSet(
    name=GlyphStyle.FINANCIAL.value,
    digits="零壹贰叁肆伍陆柒捌玖",
    ten="拾",
    hundred="佰",
    thousand="仟",
    ten_thousand="万",
    hundred_million="亿",
    elide_leading_one=False,
)

_BY_STYLE: dict[GlyphStyle, GlyphSet] = {
    GlyphStyle.STANDARD: STANDARD,
    GlyphStyle.FINANCIAL: FINANCIAL,
}


def glyph_set(style: GlyphStyle | str) -> GlyphSet:
    """Resolve a style (or its string value, e.g. "financial") to its glyph set.

    Raises:
        ValueError: If the style is unknown.
    """
    return _BY_STYLE[GlyphStyle(style)]


# ─── Parser Synonym Tables ───────────────────────────────────────────

ZERO_GLYPHS: frozenset[str] = frozenset("零〇")

DIGIT_GLYPHS: dict[str, int] = {
    **dict.fromkeys("一壹弌幺", 1),
    **dict.fromkeys("二贰貳弍两", 2),
    **dict.fromkeys("三叁參弎", 3),
    **dict.fromkeys("四肆", 4),
    **dict.fromkeys("五伍", 5),
    **dict.fromkeys("六陆陸", 6),
    **dict.fromkeys("七柒", 7),
    **dict.fromkeys("八捌", 8),
    **dict.fromkeys("九玖", 9),
}

TEN_GLYPHS: frozenset[str] = frozenset("十拾")
HUNDRED_GLYPHS: frozenset[str] = frozenset("百佰陌")
THOUSAND_GLYPHS: frozenset[str] = frozenset("千仟阡")
TEN_THOUSAND_GLYPHS: frozenset[str] = frozenset("万萬")
HUNDRED_MILLION_GLYPHS: frozenset[str] = frozenset("亿億")

MAGNITUDE_GLYPHS: frozenset[str] = (
    TEN_GLYPHS | HUNDRED_GLYPHS | THOUSAND_GLYPHS | TEN_THOUSAND_GLYPHS | HUNDRED_MILLION_GLYPHS
)
